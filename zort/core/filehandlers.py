__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

import os
import logging

from .logs import LoggedOperation, FalseLogger
from .errors import (
    InputFormatError,
    SourceNotFoundError,
    NoOverwriteError,
    DuplicateNameError,
    FileAccessError,
)
from .records import BenchmarkDescriptor, RunRecord, Limit

ZUMMARY = 'zummary'

class FileIOMixin(LoggedOperation):
    """
    Class for containing Filehandler behaviour which is exactly identical
    for all Filehandler subclasses.

    Identical behaviour
    -------------------

    1. Create/save file:

    Filehandlers intrinsically know the file they are attached to so there are
    no attributes passed to either of these.

        fh.save_file()

    2. Get/set:

        contents = fh.get()
        fh.set(contents)
    """

    def __init__(
            self,
            path     : str,
            logger   : logging.Logger | FalseLogger = None,
            label    : str = None,
            forceful : bool = None,
            verbose  : int = 0
        ) -> None:
        """
        General filehandler for zort operations involving file I/O operations.

        :param path:        (str) The path to the file on the filesystem.

        :param logger:      (logging.Logger | FalseLogger) An existing logger object.

        :param label:       (str) The label to apply to the logger object.

        :param forceful:    (bool) Overwrite the file on saving if it already exists.

        :param verbose:     (int) Level of verbosity for log messages (see core.init_logger).

        :returns: None
        """

        self._file     = path
        self._forceful = forceful
        self._value    = None

        super().__init__(
            logger,
            label=label,
            verbose=verbose)

    @property
    def filepath(self) -> str:
        """
        Returns the private file attribute.
        """
        return self._file

    def file_exists(self) -> bool:
        """
        Return true if the file is found.
        """
        return os.path.isfile(self._file)

    def save_file(self):
        """
        Wrapper for _set_content method
        """
        self.logger.debug(f'Saving file {self._file}')
        self._set_content()

    def set(self, value):
        """
        Reset the whole value of the private ``_value`` attribute.
        """
        self._value = value

    def get(self):
        """
        Get the value of the private ``_value`` attribute.
        """
        self._check_value()

        return self._value

    def _check_save(self) -> bool:
        """
        Returns true if content is able to be saved.
        """
        if self.file_exists() and not self._forceful:
            raise NoOverwriteError(file=self._file)
        return True

    def _check_value(self):
        """
        Check if the value needs to be loaded from the file.
        """
        if self._value is None:
            self._get_content()

class ListIOMixin(FileIOMixin):
    """
    Line-oriented file. Every line must be non-empty, must not contain
    zero characters and must be terminated by a new-line.
    """

    def set(self, value: list):
        """
        Extends the set function of the parent, creates a copy
        of the input list so the original parameter is preserved.
        """
        super().set(list(value))

    def _get_content(self) -> None:
        """
        Open the file to get content, checking the line structure.
        """
        if not self.file_exists():
            raise SourceNotFoundError(sfile=self._file)

        self.logger.debug(f'Reading lines from "{self._file}"')
        try:
            with open(self._file, encoding='utf-8') as f:
                content = f.read()
        except UnicodeDecodeError as err:
            raise InputFormatError(
                reason='invalid UTF-8 character',
                lineno=err.object[:err.start].count(b'\n') + 1,
                file=self._file)
        except OSError as err:
            raise FileAccessError(file=self._file, reason=err.strerror)

        lines = content.split('\n')
        if lines[-1] != '':
            raise InputFormatError(
                reason='unexpected end-of-file before new-line',
                lineno=len(lines), file=self._file)
        lines = lines[:-1]

        for lineno, line in enumerate(lines, start=1):
            if not line:
                raise InputFormatError(reason='empty line', lineno=lineno, file=self._file)
            if '\0' in line:
                raise InputFormatError(reason='unexpected zero character', lineno=lineno, file=self._file)

        self._value = lines

    def _set_content(self) -> None:
        """If the content can be saved, save to the file."""
        if super()._check_save():
            try:
                with open(self._file, 'w', encoding='utf-8') as f:
                    f.write(''.join(f'{line}\n' for line in self._value))
            except OSError as err:
                raise FileAccessError(file=self._file, reason=err.strerror)

class TextFileHandler(ListIOMixin):
    """Plain list of lines, used for the reordered benchmark list."""

class BenchmarksFile(ListIOMixin):
    """Benchmark list with lines '<order> <name>' or '<order> <path> <name>'."""

    def parse(self) -> list:
        """
        Parse every line into a ``BenchmarkDescriptor``.

        :returns:   List of descriptors in file order.
        """
        benchmarks = []
        names = set()
        fields = None

        for lineno, line in enumerate(self.get(), start=1):
            parts = line.split(' ')
            if not (parts[0].isascii() and parts[0].isdigit()):
                raise InputFormatError(reason='expected digit', lineno=lineno, file=self._file)

            if len(parts) not in (2, 3) or '' in parts:
                raise InputFormatError(reason='expected two or three fields', lineno=lineno, file=self._file)
            if fields is None:
                fields = len(parts)
            elif len(parts) != fields:
                raise InputFormatError(
                    reason=f'expected {fields} fields as in previous lines',
                    lineno=lineno, file=self._file)

            if len(parts) == 2:
                benchmark = BenchmarkDescriptor(int(parts[0]), parts[1])
            else:
                benchmark = BenchmarkDescriptor(int(parts[0]), parts[2], path=parts[1])

            if benchmark.name in names:
                raise DuplicateNameError(name=benchmark.name, source=self._file)
            names.add(benchmark.name)
            benchmarks.append(benchmark)

        self.logger.info(f'Parsed {len(benchmarks)} benchmarks from "{self._file}"')
        return benchmarks

class ZummaryFile(ListIOMixin):
    """Zummary of benchmark runs with a single header line."""

    @classmethod
    def from_directory(cls, directory: str, **kwargs):
        """
        Locate the zummary file within a results directory.
        """
        if not os.path.isdir(directory):
            raise SourceNotFoundError(sfile=directory, kind='directory')
        return cls(os.path.join(directory, ZUMMARY), **kwargs)

    def parse(self) -> list:
        """
        Parse every line after the header into a ``RunRecord``.

        :returns:   List of records in file order.
        """
        lines = self.get()
        if not lines:
            raise InputFormatError(reason='failed to read header line', lineno=1, file=self._file)

        records = []
        names = set()
        for lineno, line in enumerate(lines[1:], start=2):
            parts = line.split()
            if len(parts) != 8:
                raise InputFormatError(reason='invalid zummary line', lineno=lineno, file=self._file)
            try:
                record = RunRecord(
                    parts[0],
                    int(parts[1]),
                    float(parts[2]),
                    float(parts[3]),
                    float(parts[4]),
                    limit=Limit(
                        time=float(parts[5]),
                        wall=float(parts[6]),
                        memory=float(parts[7])),
                )
            except ValueError:
                raise InputFormatError(reason='invalid zummary line', lineno=lineno, file=self._file)

            if record.name in names:
                raise DuplicateNameError(name=record.name, source=self._file)
            names.add(record.name)
            records.append(record)

        self.logger.info(f'Parsed {len(records)} zummary entries from "{self._file}"')
        return records
