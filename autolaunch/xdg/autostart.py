"""Desktop Application Autostart Specification support

This module aims to implement the discovery side of the Desktop Application Autostart Specification version 0.5,
available at:
http://standards.freedesktop.org/autostart-spec/autostart-spec-0.5.html

Each autostart directory is scanned for `*.desktop` files; every file that parses as a valid application and passes
the admission policy is appended to the launch queue.

"""
from collections import namedtuple
import logging
import os
from os.path import join

from ..policy import admit, probeTryExec
from .desktopentry import DesktopEntry, DesktopEntryError


logger = logging.getLogger("autolaunch.xdg.autostart")


DESKTOP_SUFFIX = '.desktop'


ScanSummary = namedtuple('ScanSummary', 'found queued skipped')

EMPTY_SUMMARY = ScanSummary(0, 0, 0)


def isDesktopFile(filename):
    """Whether the last dot-separated part of `filename` is exactly `desktop`."""
    _, dot, extension = filename.rpartition('.')
    return bool(dot) and extension == DESKTOP_SUFFIX[1:]


def listDesktopFiles(directory):
    """List the desktop entry file names in `directory`, in whatever order the filesystem returns them."""
    return [filename for filename in os.listdir(directory) if isDesktopFile(filename)]


def scanDirectory(directory, index, settings, queue, tryExecProbe=probeTryExec):
    """Scan one autostart directory, appending admitted entries to `queue`.

    Returns a ScanSummary; `found` counts every `.desktop` file, `queued` the ones appended to the queue, and `skipped`
    everything else (including files that couldn't be read or parsed).

    """
    if settings.isDirBlocked(directory):
        logger.warning("Autostart directory blocked by config: %s", directory)
        return EMPTY_SUMMARY

    try:
        filenames = listDesktopFiles(directory)
    except FileNotFoundError:
        logger.warning("Autostart directory does not exist: %s", directory)
        return EMPTY_SUMMARY
    except OSError as ex:
        logger.warning("Couldn't read autostart directory %s: %s", directory, ex.strerror)
        return EMPTY_SUMMARY

    logger.info("[Directory %d] Scanning: %s", index + 1, directory)

    found = 0
    queued = 0
    for filename in filenames:
        found += 1
        fullpath = join(directory, filename)

        try:
            entry = DesktopEntry.load(fullpath)
        except OSError as ex:
            logger.error("Error opening file %s: %s", fullpath, ex.strerror)
            continue
        except DesktopEntryError as ex:
            logger.debug("Ignoring %s: %s", fullpath, ex)
            continue

        if not entry.isValid:
            logger.debug("Ignoring %s: missing Type=Application, Name or Exec.", fullpath)
            continue

        decision = admit(entry, settings.findAppRule(entry.name), tryExecProbe)
        if not decision:
            logger.info("  Skipped (%s): %s", decision.reason, entry.name)
            continue

        queue.append(entry)
        queued += 1
        logger.info("  Queued: %s", entry.name)

    summary = ScanSummary(found, queued, found - queued)
    logger.info("  --- Summary for %s --- found: %d, queued: %d, skipped: %d", directory, *summary)

    return summary


def scanAll(directories, settings, queue, tryExecProbe=probeTryExec):
    """Scan each directory in priority order; return the list of ScanSummary objects."""
    return [scanDirectory(directory, index, settings, queue, tryExecProbe)
            for index, directory in enumerate(directories)]
