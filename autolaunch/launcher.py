# -*- coding: utf-8 -*-
"""AutoLaunch: Staggered application launcher

Copyright (c) 2012-2013 David H. Bronke
Licensed under the MIT license; see the LICENSE file for details.

"""
from collections import namedtuple
import logging
import subprocess
import time

from .utils import loggerFor, pl


logger = logging.getLogger("autolaunch.launcher")


# Shells to try, in order, for running Exec command lines.
SHELLS = ('sh', 'bash')


LaunchReport = namedtuple('LaunchReport', 'total succeeded failed')


def spawnDetached(command, workDir=''):
    """Start the given command line under a shell, detached from this process.

    The child gets its own session (so it survives the loss of our controlling terminal) and has its standard streams
    connected to the null device. If `workDir` is given but can't be entered, the error is logged and the command is
    started in the current directory instead.

    Returns the `Popen` object of the new process; raises `OSError` if no process could be created, or
    `ValueError` if the command or directory contains a NUL character.

    """
    kwargs = dict(
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            close_fds=True,
            start_new_session=True,
            )

    if workDir:
        try:
            return _spawnShell(command, cwd=workDir, **kwargs)
        except OSError as ex:
            if ex.filename != workDir:
                raise

            logger.error("Failed to chdir to %s: %s", workDir, ex.strerror)

    return _spawnShell(command, **kwargs)


def _spawnShell(command, **kwargs):
    for shell in SHELLS[:-1]:
        try:
            return subprocess.Popen([shell, '-c', command], **kwargs)
        except FileNotFoundError as ex:
            if ex.filename != shell:
                raise

            logger.debug("Shell %r not found; trying the next one.", shell)

    return subprocess.Popen([SHELLS[-1], '-c', command], **kwargs)


class Launcher(object):
    """Launches every entry of a LaunchQueue in order, sleeping before each launch.

    The first entry waits `settings.startupDelayMs`; every following entry waits `settings.delayMs`. An AppRule with a
    delay override replaces either of these for its application.

    """
    def __init__(self, settings, spawn=spawnDetached, sleep=time.sleep, dryRun=False):
        self.logger = loggerFor(self)
        self.settings = settings
        self.spawn = spawn
        self.sleep = sleep
        self.dryRun = dryRun

        # Children we've started that haven't been seen exiting yet.
        self.children = []

    def delayFor(self, index, entry):
        """Return the delay in milliseconds to wait before launching `entry` at position `index` in the queue."""
        rule = self.settings.findAppRule(entry.name)
        if rule is not None and rule.delayOverrideMs is not None:
            return rule.delayOverrideMs

        if index == 0:
            return self.settings.startupDelayMs

        return self.settings.delayMs

    def launch(self, entry):
        """Start the given entry's command; return True if a process was created."""
        command = entry.command

        if self.dryRun:
            self.logger.info("Would run %r for %s.", command, entry.name)
            return True

        try:
            child = self.spawn(command, entry.path)
        except (OSError, ValueError):
            self.logger.exception("Couldn't start %s (%r)!", entry.name, command)
            return False

        self.children.append(child)
        return True

    def reapChildren(self):
        """Collect the exit status of any children that have already exited, without waiting for the others."""
        self.children = [child for child in self.children if child.poll() is None]

    def launchAll(self, queue):
        if len(queue) == 0:
            self.logger.info("No applications to launch.")
            return LaunchReport(0, 0, 0)

        total = len(queue)
        self.logger.info("Launching %s.", pl(total, 'application'))

        succeeded = 0
        for index, entry in enumerate(queue):
            delay = self.delayFor(index, entry)
            if delay > 0 and not self.dryRun:
                self.sleep(delay / 1000.0)

            self.reapChildren()

            if self.launch(entry):
                succeeded += 1
                self.logger.info("[%d/%d] Access launching: %s", index + 1, total, entry.name)
            else:
                self.logger.error("[%d/%d] Deny launching: %s", index + 1, total, entry.name)

        self.reapChildren()

        report = LaunchReport(total, succeeded, total - succeeded)
        self.logger.info("Launch completed. Total: %d, successful: %d, failed: %d", *report)

        return report
