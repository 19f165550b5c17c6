# -*- coding: utf-8 -*-
"""AutoLaunch: Utility functions

Copyright (c) 2012-2013 David H. Bronke
Licensed under the MIT license; see the LICENSE file for details.

"""
import logging


def loggerFor(cls):
    if not isinstance(cls, type):
        cls = type(cls)

    return logging.getLogger('{}.{}'.format(cls.__module__, cls.__name__))


def pl(number, singularUnit, pluralUnit=None):
    """Attach the appropriate singular or plural units to the given number.

    If `pluralUnit` is omitted, it defaults to `singularUnit + "s"`.

    """
    if pluralUnit is None:
        pluralUnit = singularUnit + "s"

    return "{} {}".format(number, singularUnit if number == 1 else pluralUnit)
