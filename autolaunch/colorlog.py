# -*- coding: utf-8 -*-
"""Colored logger class

Copyright (c) 2011 David H. Bronke and Christopher S. Case
Licensed under the MIT license; see the LICENSE file for details.

"""
import logging


LEVEL_COLORS = (
        (logging.CRITICAL, '\x1b[1;4;35m'),  # bold underlined magenta
        (logging.ERROR, '\x1b[1;31m'),  # red
        (logging.WARNING, '\x1b[1;33m'),  # yellow
        (logging.INFO, '\x1b[1;32m'),  # green
        (logging.DEBUG, '\x1b[37m'),  # white
        )

STYLES = {
        'bold': '\x1b[1m',
        'faint': '\x1b[2m',
        'italic': '\x1b[3m',
        'underline': '\x1b[4m',
        'inverse': '\x1b[7m',

        'blackFG': '\x1b[30m',
        'redFG': '\x1b[31m',
        'greenFG': '\x1b[32m',
        'yellowFG': '\x1b[33m',
        'blueFG': '\x1b[34m',
        'magentaFG': '\x1b[35m',
        'cyanFG': '\x1b[36m',
        'whiteFG': '\x1b[37m',

        'resetTerm': '\x1b[0m',  # normal
        }

COLORED_FORMAT = (
        "%(bold)s%(blackFG)s[%(resetTerm)s%(levelColor)s%(levelname)-8s%(resetTerm)s%(bold)s%(blackFG)s]%(resetTerm)s "
        "%(cyanFG)s%(name)s%(bold)s%(blackFG)s:%(resetTerm)s  %(message)s"
        )


def levelColor(levelno):
    for threshold, color in LEVEL_COLORS:
        if levelno >= threshold:
            return color

    return STYLES['resetTerm']  # NOTSET and anything else


class ColoredConsoleHandler(logging.StreamHandler):
    """A StreamHandler that adds terminal color attributes to each record, for use in format strings.

    Colors are only emitted when the stream is a terminal; otherwise every color attribute is an empty string, so the
    same format string can be used either way.

    """
    def __init__(self, stream=None, useColor=None):
        super(ColoredConsoleHandler, self).__init__(stream)

        if useColor is None:
            isatty = getattr(self.stream, 'isatty', None)
            useColor = bool(isatty and isatty())

        self.useColor = useColor

    def emit(self, record):
        if self.useColor:
            record.levelColor = levelColor(record.levelno)
            for name, code in STYLES.items():
                setattr(record, name, code)

        else:
            record.levelColor = ''
            for name in STYLES:
                setattr(record, name, '')

        return logging.StreamHandler.emit(self, record)
