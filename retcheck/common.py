import contextlib
import os
import pathlib
import sys
import typing


def relpath(
        path: pathlib.Path,
        relative2: pathlib.Path = pathlib.Path('.')) -> pathlib.Path:
    """os.path.relpath for pathlib. Returns a pathlib.Path."""
    return pathlib.Path(os.path.relpath(str(path), str(relative2)))


def path_string(path: pathlib.Path) -> str:
    """Converts a pathlib.Path to a human-readable string."""
    return str(relpath(path))


class Messager:
    """Prints messages about what the checker is doing to stderr.

    The verbosity is -1 for quiet mode, 0 by default and bigger for more
    output. A message is printed if the verbosity is at least the
    min_verbosity given when calling the messager.
    """

    def __init__(self, verbosity: int) -> None:
        self.verbosity = verbosity
        self.parent_messager: typing.Optional[Messager] = None
        self.prefix = ''

    # returns whether something was printed
    def __call__(self, min_verbosity: int, string: str) -> bool:
        message = self.prefix + string
        if self.parent_messager is not None:
            return self.parent_messager(min_verbosity, message)

        if self.verbosity < min_verbosity:
            return False
        print(message, file=sys.stderr)
        return True

    @contextlib.contextmanager
    def indented(self,
            min_verbosity: int,
            string: str) -> typing.Iterator[None]:
        """Indent the messages printed inside the with statement.

        The indentation is stored in the root messager, so it is shared by
        all messagers created with with_prefix(). Use a separate root
        messager in each thread.
        """
        if not self(min_verbosity, string):
            yield
            return

        root = self
        while root.parent_messager is not None:
            root = root.parent_messager

        spaces = ' ' * 2
        root.prefix = spaces + root.prefix
        try:
            yield
        finally:
            assert root.prefix.startswith(spaces)
            root.prefix = root.prefix[len(spaces):]

    def with_prefix(self, prefix: str) -> 'Messager':
        result = Messager(self.verbosity)
        result.parent_messager = self
        result.prefix = prefix + ': '
        return result


class SourceFile:
    """A file whose code was turned into the subjects being checked."""

    def __init__(self, path: pathlib.Path):
        self.path = path

    def __repr__(self) -> str:
        return '<%s of %s>' % (type(self).__name__, self.path)

    def open(self) -> typing.TextIO:
        # utf-8-sig skips a byte order mark if there is one
        return self.path.open('r', encoding='utf-8-sig')


class Location:

    def __init__(
            self,
            source_file: SourceFile,
            offset: int,
            length: int) -> None:
        assert isinstance(source_file, SourceFile)
        assert offset >= 0
        assert length >= 0

        self.source_file = source_file
        self.offset = offset
        self.length = length

    @property
    def end(self) -> int:
        return self.offset + self.length

    def is_empty(self) -> bool:
        return self.length == 0

    def __repr__(self) -> str:
        return '<Location offset=%r length=%r>' % (self.offset, self.length)

    def __eq__(self,
               other: typing.Any) -> typing.Union[bool, 'NotImplemented']:
        if not isinstance(other, Location):
            return NotImplemented
        return ((self.source_file, self.offset, self.length) ==
                (other.source_file, other.offset, other.length))

    def __hash__(self) -> int:
        return hash((self.source_file, self.offset, self.length))

    # raises OSError
    def _read_before_value_after(self) -> typing.Tuple[str, str, str]:
        with self.source_file.open() as file:
            # offsets count characters, so file.seek() can't be used
            before = file.read(self.offset)
            value = file.read(self.length)
            after = '' if value.endswith('\n') else file.readline()

        if len(before) != self.offset or len(value) != self.length:
            raise OSError("file ended too soon")

        return (before, value, after)

    def get_line_column_string(self) -> str:
        try:
            before, value, junk = self._read_before_value_after()
        except OSError:
            # line numbers are unknown, offsets are better than nothing
            startline = endline = 1
            startcolumn = self.offset
            endcolumn = self.end
        else:
            startline = 1 + before.count('\n')
            startcolumn = len(before.rsplit('\n', 1)[-1])
            endline = startline + value.count('\n')
            endcolumn = len((before + value).rsplit('\n', 1)[-1])

        return '%s:%s,%s...%s,%s' % (
            path_string(self.source_file.path),
            startline, startcolumn, endline, endcolumn)

    def get_source(self) -> typing.Tuple[str, str, str]:
        """Reads the code at the location. Raises OSError on failure.

        Returns the full lines that the location is on, split into a 3-tuple
        of code before the location, at the location and after it. The
        trailing newline is not included.
        """
        before, value, after = self._read_before_value_after()
        return (before.rsplit('\n', 1)[-1], value, after.rstrip('\n'))
