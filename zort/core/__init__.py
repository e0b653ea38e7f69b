__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

from .logs import (
    LoggedOperation,
    FalseLogger,
    init_logger,
    levels
)

from .errors import ZortException

from .config import AllocationConfig

from .records import (
    BenchmarkDescriptor,
    RunRecord,
    Limit,
    Bucket,
    ScheduledBucket
)

from .filehandlers import (
    BenchmarksFile,
    ZummaryFile,
    TextFileHandler
)
