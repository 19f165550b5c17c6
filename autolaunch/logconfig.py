# -*- coding: utf-8 -*-
"""AutoLaunch: Logging configuration

Copyright (c) 2012-2013 David H. Bronke
Licensed under the MIT license; see the LICENSE file for details.

"""
import logging
import logging.config

from .colorlog import COLORED_FORMAT


def configure(level=logging.INFO, logFile=None):
    """Send log messages to the console (colored, if it's a terminal) and, optionally, to `logFile`."""
    handlers = {
            'console': {
                'class': 'autolaunch.colorlog.ColoredConsoleHandler',
                'formatter': 'colored',
                'level': level,
                'stream': 'ext://sys.stdout'
                },
            }

    if logFile:
        handlers['file'] = {
                'class': 'logging.FileHandler',
                'formatter': 'plain',
                'level': level,
                'filename': logFile,
                'encoding': 'utf-8',
                }

    logging.config.dictConfig({
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'colored': {
                    'format': COLORED_FORMAT,
                    },
                'plain': {
                    'format': "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
                    },
                },
            'handlers': handlers,
            'root': {
                'handlers': list(handlers),
                'level': level,
                },
            })
