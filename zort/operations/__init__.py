from .match import match_records
from .allocate import BucketPacker
from .schedule import NodeScheduler
from .cost import CostEstimate, estimate_cost
from .report import (
    Report,
    assemble_report,
    format_report,
    reorder_benchmarks
)
from .operation import AllocationOperation
