# -*- coding: utf-8 -*-
"""AutoLaunch: Settings

Copyright (c) 2012-2013 David H. Bronke
Licensed under the MIT license; see the LICENSE file for details.

Settings are read from INI files with three sections:

    [general]
    startup_delay = 1000
    delay = 200
    log_level = info
    log_file = ~/.cache/autolaunch.log

    [apps]
    Some Application = allow:0, delay:500

    [dirs]
    /usr/share/autostart = block

"""
from collections import namedtuple
import configparser
import logging
from os.path import expanduser, normpath

from .xdg.basedir import configDirs


logger = logging.getLogger("autolaunch.settings")


CONFIG_FILENAME = 'autolaunch/config.ini'

DEFAULT_STARTUP_DELAY_MS = 0
DEFAULT_DELAY_MS = 200


class SettingsError(Exception):
    pass


AppRule = namedtuple('AppRule', 'name allow delayOverrideMs', defaults=(True, None))

DirRule = namedtuple('DirRule', 'path allow')


def normalizeDir(path):
    return normpath(expanduser(path))


def parseAppRule(name, value, filename='<string>'):
    """Parse an `[apps]` value like `allow:0, delay:500` into an AppRule.

    Missing tokens keep their defaults; a negative delay means "no override".

    """
    allow = True
    delayOverrideMs = None

    for token in value.split(','):
        token = token.strip()
        if not token:
            continue

        key, sep, number = token.partition(':')
        key = key.strip()
        if not sep or key not in ('allow', 'delay'):
            logger.warning("Ignoring unknown token %r for application %r in %s.", token, name, filename)
            continue

        number = _parseInt(number, filename, 'apps', name)
        if key == 'allow':
            allow = number != 0
        else:
            delayOverrideMs = number if number >= 0 else None

    return AppRule(name, allow, delayOverrideMs)


def _parseInt(value, filename, section, key):
    try:
        return int(value.strip())
    except ValueError:
        raise SettingsError("{}: [{}] {}: expected an integer, got {!r}".format(filename, section, key, value))


def _parseLogLevel(value, filename):
    value = value.strip()
    if value.lstrip('-').isdigit():
        return int(value)

    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise SettingsError("{}: [general] log_level: unknown log level {!r}".format(filename, value))

    return level


class Settings(object):
    """The rule table consulted while scanning and launching.

    Only two lookups are used by the rest of the package: `findAppRule(name)` and `isDirBlocked(path)`.

    """
    def __init__(self, startupDelayMs=DEFAULT_STARTUP_DELAY_MS, delayMs=DEFAULT_DELAY_MS, logLevel=logging.INFO,
            logFile=None, appRules=(), dirRules=()):
        self.startupDelayMs = startupDelayMs
        self.delayMs = delayMs
        self.logLevel = logLevel
        self.logFile = logFile
        self.appRules = dict()
        self.dirRules = dict()
        self.loadedFiles = []

        for rule in appRules:
            self.appRules[rule.name] = rule
        for rule in dirRules:
            self.dirRules[normalizeDir(rule.path)] = rule

    def findAppRule(self, name):
        """Return the AppRule for the application with exactly this name, or None."""
        return self.appRules.get(name)

    def isDirBlocked(self, path):
        rule = self.dirRules.get(normalizeDir(path))
        return rule is not None and not rule.allow

    def loadString(self, text, filename='<string>'):
        parser = self._makeParser()
        try:
            parser.read_string(text, source=filename)
        except configparser.Error as ex:
            raise SettingsError("{}: {}".format(filename, ex))

        self._apply(parser, filename)

    def loadFile(self, filename):
        """Load the given settings file, overriding any settings it defines.

        Raises `OSError` if the file can't be read, or `SettingsError` if it is malformed.

        """
        logger.debug("Loading settings file: %s", filename)
        with open(filename, 'r', encoding='utf-8') as settingsFile:
            self.loadString(settingsFile.read(), filename)

        self.loadedFiles.append(filename)

    def loadSettings(self, filename=None, environ=None):
        """Load settings from the given file, or from every `autolaunch/config.ini` in the XDG config directories.

        When searching, lower-priority files are loaded first so higher-priority ones override them; files that
        can't be read are skipped. An explicitly given file must be readable.

        """
        logger.info("Loading settings...")

        if filename is not None:
            self.loadFile(filename)

        else:
            # From the XDG Base Directory Specification:
            #   When attempting to read a file, if for any reason a file in a certain directory is unaccessible, [...]
            #   then the processing of the file in that directory should be skipped.
            for found in reversed(configDirs(environ).findAllFiles(CONFIG_FILENAME)):
                try:
                    self.loadFile(found)
                except OSError as ex:
                    logger.warning("Skipping unreadable settings file %s: %s", found, ex.strerror)

        logger.info("Finished loading settings.")

    def describe(self):
        """Return a human-readable description of the current settings."""
        lines = [
                "Startup delay: {} ms".format(self.startupDelayMs),
                "Delay between apps: {} ms".format(self.delayMs),
                "Log level: {}".format(logging.getLevelName(self.logLevel)),
                "Log file: {}".format(self.logFile or '(none)'),
                "Settings files: {}".format(", ".join(self.loadedFiles) or '(none)'),
                "",
                "Application rules ({}):".format(len(self.appRules)),
                ]

        for rule in self.appRules.values():
            line = "  - {}: {}".format(rule.name, "ALLOW" if rule.allow else "BLOCK")
            if rule.delayOverrideMs is not None:
                line += ", delay: {} ms".format(rule.delayOverrideMs)
            lines.append(line)

        lines.append("")
        lines.append("Directory rules ({}):".format(len(self.dirRules)))
        for path, rule in self.dirRules.items():
            lines.append("  - {}: {}".format(path, "ALLOW" if rule.allow else "BLOCK"))

        return '\n'.join(lines)

    def _makeParser(self):
        parser = configparser.RawConfigParser(
                delimiters=('=',),
                comment_prefixes=('#', ';'),
                inline_comment_prefixes=('#',),
                strict=False,
                )

        # Application names are case-sensitive!
        parser.optionxform = str

        return parser

    def _apply(self, parser, filename):
        if parser.has_section('general'):
            for key, value in parser.items('general'):
                if key == 'startup_delay':
                    self.startupDelayMs = _parseInt(value, filename, 'general', key)
                elif key == 'delay':
                    self.delayMs = _parseInt(value, filename, 'general', key)
                elif key == 'log_level':
                    self.logLevel = _parseLogLevel(value, filename)
                elif key == 'log_file':
                    self.logFile = expanduser(value.strip()) or None
                else:
                    logger.warning("Ignoring unknown setting %r in [general] of %s.", key, filename)

        if parser.has_section('apps'):
            for name, value in parser.items('apps'):
                self.appRules[name] = parseAppRule(name, value, filename)

        if parser.has_section('dirs'):
            for path, value in parser.items('dirs'):
                path = normalizeDir(path)
                self.dirRules[path] = DirRule(path, value.strip() != 'block')

        for section in parser.sections():
            if section not in ('general', 'apps', 'dirs'):
                logger.warning("Ignoring unknown section [%s] in %s.", section, filename)
