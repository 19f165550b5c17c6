"""XDG Base Directory Specification support

This module aims to implement the parts of the XDG Base Directory Specification version 0.8 used to locate
configuration files and autostart directories, available at:
http://standards.freedesktop.org/basedir-spec/basedir-spec-0.8.html

"""
import os
from os.path import isfile, join
import pwd


def homeDir(environ=None):
    """Return the current user's home directory.

    `$HOME` is used if it is set; otherwise the home directory is looked up in the password database.

    """
    if environ is None:
        environ = os.environ

    home = environ.get('HOME')
    if home:
        return home

    return pwd.getpwuid(os.getuid()).pw_dir


class BaseDirManager(object):
    def __init__(self, homeVar, defaultHome, dirsVar=None, defaultDirs='', environ=None):
        if environ is None:
            environ = os.environ

        # From the XDG Base Directory Specification:
        #   If $XDG_CONFIG_HOME is either not set or empty, a default equal to $HOME/.config should be used.
        self.home = environ.get(homeVar) or join(homeDir(environ), defaultHome)
        if dirsVar is None:
            self.dirs = []
        else:
            self.dirs = [dir for dir in (environ.get(dirsVar) or defaultDirs).split(':') if dir]

    def findAllFiles(self, filename):
        """Find the full paths of all existing files by this name in the configured base directories.

        Base directories are searched in order of importance.

        """
        filenames = []
        for dir in [self.home] + self.dirs:
            fullpath = join(dir, filename)
            if isfile(fullpath):
                filenames.append(fullpath)

        return filenames


def configDirs(environ=None):
    """Build the manager for $XDG_CONFIG_HOME and $XDG_CONFIG_DIRS."""
    # $XDG_CONFIG_DIRS defines the preference-ordered set of base directories to search for configuration files in
    # addition to the $XDG_CONFIG_HOME base directory. If $XDG_CONFIG_DIRS is either not set or empty, a value equal to
    # /etc/xdg should be used.
    return BaseDirManager('XDG_CONFIG_HOME', '.config', 'XDG_CONFIG_DIRS', '/etc/xdg', environ=environ)


SYSTEM_AUTOSTART_DIRS = ('/etc/xdg/autostart', '/usr/share/autostart')


def autostartDirs(environ=None):
    """Return the autostart directories to scan, most important first.

    The user's directory always comes first, followed by the system-wide directories. This order is also the order in
    which applications get launched.

    """
    return [join(homeDir(environ), '.config', 'autostart')] + list(SYSTEM_AUTOSTART_DIRS)
