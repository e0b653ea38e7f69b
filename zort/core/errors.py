__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

class ZortException(Exception):
    """Base class for every fatal condition raised by zort."""
    def __init__(self, verbose=0):
        super().__init__(self.message)
        if verbose < 1:
            self.__class__.__module__ = 'builtins'
    def get_str(self):
        return self.__class__.__name__

# Input mismatch between the benchmark list and the zummary.

class InputMismatchError(ZortException):
    """Benchmark and zummary names do not form a one-to-one mapping."""

class UnmatchedRecordError(InputMismatchError):
    """A zummary entry has no benchmark with the same name."""
    def __init__(self, name='', verbose=0):
        self.name = name
        self.message = f"could not find zummary entry '{name}' in benchmarks"
        super().__init__(verbose=verbose)

class UnmatchedDescriptorError(InputMismatchError):
    """A benchmark has no zummary entry with the same name."""
    def __init__(self, name='', verbose=0):
        self.name = name
        self.message = f"could not find benchmark entry '{name}' in zummary"
        super().__init__(verbose=verbose)

class CountMismatchError(InputMismatchError):
    """Sizes of the two collections differ after matching."""
    def __init__(self, benchmarks=0, records=0, verbose=0):
        self.message = f'matched {benchmarks} benchmarks against {records} zummary entries'
        super().__init__(verbose=verbose)

class DuplicateNameError(InputMismatchError):
    """A name occurs more than once in one collection."""
    def __init__(self, name='', source='benchmarks', verbose=0):
        self.name = name
        self.message = f"duplicate name '{name}' in {source}"
        super().__init__(verbose=verbose)

# Configuration

class ConfigurationError(ZortException):
    """An option value is out of range or not recognised."""
    def __init__(self, message='invalid configuration', verbose=0):
        self.message = message
        super().__init__(verbose=verbose)

class InvalidBucketSizeError(ConfigurationError):
    def __init__(self, size=0, verbose=0):
        super().__init__(f'invalid bucket size {size} (expected positive number)', verbose=verbose)

class InvalidNodeCountError(ConfigurationError):
    def __init__(self, nodes=0, verbose=0):
        super().__init__(f'invalid number of nodes {nodes} (expected positive number)', verbose=verbose)

class InvalidFractionError(ConfigurationError):
    def __init__(self, fraction=0, verbose=0):
        super().__init__(f'invalid fast bucket fraction {fraction} (expected 0..100)', verbose=verbose)

class InvalidOptionError(ConfigurationError):
    pass

# Internal consistency checks of the packing algorithm.

class AlgorithmInvariantViolation(ZortException):
    """The packing logic broke one of its own invariants."""

class CapacityExceededError(AlgorithmInvariantViolation):
    def __init__(self, bucket=0, capacity=0, verbose=0):
        self.message = f'bucket {bucket} exceeds its capacity of {capacity}'
        super().__init__(verbose=verbose)

class DoubleScheduledError(AlgorithmInvariantViolation):
    def __init__(self, name='', verbose=0):
        self.message = f"zummary entry '{name}' scheduled twice"
        super().__init__(verbose=verbose)

class IncompleteSchedulingError(AlgorithmInvariantViolation):
    def __init__(self, scheduled=0, total=0, verbose=0):
        self.message = f'only {scheduled} out of {total} entries scheduled'
        super().__init__(verbose=verbose)

# Reading and writing files.

class InputFormatError(ZortException):
    """A line of an input file could not be parsed."""
    def __init__(self, reason='', lineno=0, file='', verbose=0):
        self.lineno = lineno
        self.file = file
        self.message = f"{reason} in line {lineno} in '{file}'"
        super().__init__(verbose=verbose)

class SourceNotFoundError(ZortException):
    """An input file or directory does not exist."""
    def __init__(self, sfile='', kind='file', verbose=0):
        self.message = f"{kind} '{sfile}' does not exist"
        super().__init__(verbose=verbose)

class NoOverwriteError(ZortException):
    """Output file already exists and the process does not have forceful overwrite set."""
    def __init__(self, file='', verbose=0):
        self.message = f"output file '{file}' already exists (use '--force' to overwrite)"
        super().__init__(verbose=verbose)

class FileAccessError(ZortException):
    """The operating system refused to read or write a file."""
    def __init__(self, file='', reason='', verbose=0):
        self.file = file
        self.message = f"cannot access '{file}' ({reason})"
        super().__init__(verbose=verbose)
