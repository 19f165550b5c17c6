# -*- coding: utf-8 -*-
"""AutoLaunch: Admission policy

Copyright (c) 2012-2013 David H. Bronke
Licensed under the MIT license; see the LICENSE file for details.

"""
from collections import namedtuple
import shutil


SKIP_HIDDEN = "hidden/no-display"
SKIP_DISALLOWED = "disallowed by config"
SKIP_TRYEXEC = "TryExec not found"


class Decision(namedtuple('Decision', 'keep reason')):
    __slots__ = ()

    def __bool__(self):
        return self.keep


KEEP = Decision(True, '')


def skip(reason):
    return Decision(False, reason)


def probeTryExec(tryExec):
    """Check whether `tryExec` names an executable file, looking it up in $PATH if it isn't a path itself."""
    return shutil.which(tryExec) is not None


def admit(entry, appRule=None, tryExecProbe=probeTryExec):
    """Decide whether the given (valid) desktop entry should be queued for launch.

    The checks are made in this order, and the first one that fails determines the reason reported:

    1. Entries marked `Hidden` or `NoDisplay` are skipped.
    2. Entries whose configured AppRule disallows them are skipped; entries without a rule are allowed.
    3. Entries whose `TryExec` executable can't be found are skipped; entries without `TryExec` always pass.

    """
    if not entry.isValid:
        raise ValueError("Can't decide admission for an invalid desktop entry: {!r}".format(entry))

    if entry.hidden or entry.noDisplay:
        return skip(SKIP_HIDDEN)

    if appRule is not None and not appRule.allow:
        return skip(SKIP_DISALLOWED)

    if entry.tryExec and not tryExecProbe(entry.tryExec):
        return skip(SKIP_TRYEXEC)

    return KEEP
