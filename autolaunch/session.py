# -*- coding: utf-8 -*-
"""AutoLaunch: Session startup

Copyright (c) 2012-2013 David H. Bronke
Licensed under the MIT license; see the LICENSE file for details.

"""
import argparse
import logging

from . import logconfig
from .launcher import Launcher
from .launchqueue import LaunchQueue
from .settings import Settings, SettingsError
from .xdg.autostart import scanAll
from .xdg.basedir import autostartDirs


logger = logging.getLogger("autolaunch")


def run(settings, directories=None, launcher=None, environ=None):
    """Scan the autostart directories, then launch everything that was queued.

    Returns a `(summaries, report)` tuple: the ScanSummary of each directory and the final LaunchReport.

    """
    if directories is None:
        directories = autostartDirs(environ)
    if launcher is None:
        launcher = Launcher(settings)

    logger.info("Scanning directories:\n%s",
            '\n'.join("  {}. {}".format(index + 1, directory) for index, directory in enumerate(directories)))

    queue = LaunchQueue()
    summaries = scanAll(directories, settings, queue)

    report = launcher.launchAll(queue)
    return summaries, report


def parseArgs(argv=None):
    parser = argparse.ArgumentParser(
            prog='autolaunch',
            description="Launch the applications in the XDG autostart directories, one after another.",
            )
    parser.add_argument('config', nargs='?',
            help="settings file to use instead of searching the XDG config directories for autolaunch/config.ini")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_const', dest='logLevel', const=logging.DEBUG,
            help="show debug messages")
    verbosity.add_argument('-q', '--quiet', action='store_const', dest='logLevel', const=logging.WARNING,
            help="only show warnings and errors")

    parser.add_argument('--log-file', dest='logFile', metavar='FILE',
            help="also write log messages to FILE")
    parser.add_argument('-n', '--dry-run', dest='dryRun', action='store_true',
            help="scan and report, but don't launch anything")

    return parser.parse_args(argv)


def main(argv=None):
    args = parseArgs(argv)

    logconfig.configure(args.logLevel or logging.INFO)

    settings = Settings()
    try:
        settings.loadSettings(args.config)
    except SettingsError as ex:
        logger.error("Invalid settings: %s", ex)
        return 1
    except OSError as ex:
        logger.error("Couldn't read settings file %s: %s", ex.filename, ex.strerror)
        return 1

    if args.logLevel is not None:
        settings.logLevel = args.logLevel
    if args.logFile is not None:
        settings.logFile = args.logFile

    try:
        logconfig.configure(settings.logLevel, settings.logFile)
    except (ValueError, OSError) as ex:
        logconfig.configure(settings.logLevel)
        logger.error("Couldn't open log file %s: %s", settings.logFile, ex)
        return 1

    logger.info("Current settings:\n%s", settings.describe())

    run(settings, launcher=Launcher(settings, dryRun=args.dryRun))
    return 0
