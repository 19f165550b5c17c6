# -*- coding: utf-8 -*-
"""AutoLaunch: Launch queue

Copyright (c) 2012-2013 David H. Bronke
Licensed under the MIT license; see the LICENSE file for details.

"""
from collections.abc import Sequence


class LaunchQueue(Sequence):
    """The ordered list of desktop entries admitted for launch.

    Entries are kept in the order they were admitted (directory priority, then the order files were encountered in each
    directory). The queue only ever grows; it is never sorted or deduplicated.

    """
    def __init__(self, entries=()):
        self._entries = list(entries)

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return '<LaunchQueue: {}>'.format(', '.join(repr(entry.name) for entry in self._entries))

    def append(self, entry):
        self._entries.append(entry)
