"""Desktop Entry Specification support

This module implements the subset of the Desktop Entry Specification version 1.1 needed to decide whether an autostart
entry should be launched, available at:
http://standards.freedesktop.org/desktop-entry-spec/desktop-entry-spec-1.1.html

Only the `[Desktop Entry]` group is read. Values are taken verbatim (no escape sequence or locale handling); boolean
keys are true only when their value is exactly `true`.

"""


DESKTOP_ENTRY_GROUP = '[Desktop Entry]'

# Longer values are truncated to these lengths rather than rejected.
MAX_LENGTHS = {
        'Name': 255,
        'Exec': 1023,
        'TryExec': 255,
        'Icon': 255,
        'Path': 1023,
        }

BOOLEAN_KEYS = ('Terminal', 'Hidden', 'NoDisplay')


class DesktopEntryError(Exception):
    pass


class NotAnApplication(DesktopEntryError):
    def __init__(self, entryType, filename=None):
        self.entryType = entryType
        self.filename = filename
        super(NotAnApplication, self).__init__(
                "Not an application (Type={}){}".format(entryType, '' if filename is None else ': ' + filename)
                )


def stripFieldCodes(command):
    """Remove all field codes (`%f`, `%U`, `%i`, ...) from the given command line.

    Each `%` is removed together with the character following it, whatever that character is; a `%` at the very end of
    the string is removed on its own. Everything else (including the whitespace around a removed field code) is kept
    verbatim, so `app %f --flag %u` becomes `app  --flag `.

    """
    result = []
    chars = iter(command)
    for char in chars:
        if char == '%':
            # Skip the field code's character too.
            next(chars, None)
            continue

        result.append(char)

    return ''.join(result)


class DesktopEntry(object):
    """A parsed `[Desktop Entry]` group.

    Instances are read-only once parsed; use `DesktopEntry.load()` or `DesktopEntry.parse()` to create them.

    """
    def __init__(self, values=None, isApplication=False, filename=None):
        self._values = dict(values or {})
        self._isApplication = isApplication
        self.filename = filename

    def __repr__(self):
        return '<DesktopEntry {!r} ({})>'.format(self.name, self.filename or 'unknown file')

    @classmethod
    def load(cls, filename):
        """Read and parse the given desktop entry file.

        Raises `OSError` if the file can't be read, or `NotAnApplication` if its `Type` key isn't `Application`.

        """
        with open(filename, 'r', encoding='utf-8', errors='replace') as entryFile:
            try:
                return cls.parse(entryFile, filename=filename)
            except NotAnApplication as ex:
                ex.filename = filename
                raise

    @classmethod
    def parse(cls, lines, filename=None):
        """Parse a desktop entry from an iterable of lines.

        Parsing stops as soon as a `Type` key with a value other than `Application` is seen.

        """
        values = dict()
        isApplication = False
        inDesktopEntry = False

        for line in lines:
            line = line.strip()

            if not line or line.startswith('#'):
                continue

            if line.startswith('['):
                inDesktopEntry = line == DESKTOP_ENTRY_GROUP
                continue

            if not inDesktopEntry or '=' not in line:
                continue

            key, value = line.split('=', 1)
            key = key.strip()
            value = value.strip()

            if key == 'Type':
                if value != 'Application':
                    raise NotAnApplication(value, filename)
                isApplication = True

            elif key in MAX_LENGTHS:
                values[key] = value[:MAX_LENGTHS[key]]

            elif key in BOOLEAN_KEYS:
                values[key] = value == 'true'

        return cls(values, isApplication, filename)

    @property
    def isApplication(self):
        """Whether a `Type=Application` line was seen."""
        return self._isApplication

    @property
    def isValid(self):
        """Whether this entry can be launched at all.

        From the Desktop Entry Specification:

            Type: This specification defines 3 types of desktop entries: Application (type 1), Link (type 2) and
            Directory (type 3).

            Name: Required in: all

            Exec: Required in: Application, Action

        """
        return self._isApplication and bool(self.name) and bool(self.exec)

    @property
    def name(self):
        """Specific name of the application, for example "Mozilla"."""
        return self._values.get('Name', '')

    @property
    def exec(self):
        """Program to execute, possibly with arguments and field codes."""
        return self._values.get('Exec', '')

    @property
    def command(self):
        """The Exec key with all field codes removed, ready to be handed to a shell."""
        return stripFieldCodes(self.exec)

    @property
    def tryExec(self):
        """Path to an executable file on disk used to determine if the program is actually installed.

        From the Desktop Entry Specification:

             If the path is not an absolute path, the file is looked up in the $PATH environment variable. If the file
             is not present or if it is not executable, the entry may be ignored (not be used in menus, for example).

        """
        return self._values.get('TryExec', '')

    @property
    def path(self):
        """If entry is of type Application, the working directory to run the program in."""
        return self._values.get('Path', '')

    @property
    def icon(self):
        return self._values.get('Icon', '')

    @property
    def terminal(self):
        """Whether the program runs in a terminal window.

        This is recorded only; autostart entries are always launched without a terminal.

        """
        return self._values.get('Terminal', False)

    @property
    def hidden(self):
        """Whether the user deleted this entry.

        From the Desktop Application Autostart Specification:

            Hidden: If the .desktop file has the Hidden key set to true then the .desktop file MUST be ignored.

        """
        return self._values.get('Hidden', False)

    @property
    def noDisplay(self):
        """NoDisplay means "this application exists, but don't display it in the menus"."""
        return self._values.get('NoDisplay', False)
