__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

from zort.core import FalseLogger
from zort.core.errors import (
    UnmatchedRecordError,
    UnmatchedDescriptorError,
    CountMismatchError,
    DuplicateNameError,
)

def _index(items: list, source: str) -> dict:
    index = {}
    for item in items:
        if item.name in index:
            raise DuplicateNameError(name=item.name, source=source)
        index[item.name] = item
    return index

def match_records(benchmarks: list, records: list, logger=FalseLogger()) -> list:
    """
    Pair every benchmark with the zummary entry of the same name. Each
    record is linked to its benchmark by name and reset to unscheduled.

    :param benchmarks:  (list) BenchmarkDescriptor objects in benchmark list order.

    :param records:     (list) RunRecord objects in zummary order.

    :param logger:      (obj) Logging object for info/debug/error messages.

    :returns:   The matched records in benchmark list order.
    """
    by_benchmark = _index(benchmarks, 'benchmarks')
    by_record    = _index(records, 'zummary')

    for record in records:
        if record.name not in by_benchmark:
            raise UnmatchedRecordError(name=record.name)
        record.benchmark = record.name
        record.scheduled = False

    matched = []
    for benchmark in benchmarks:
        record = by_record.get(benchmark.name)
        if record is None:
            raise UnmatchedDescriptorError(name=benchmark.name)
        matched.append(record)

    if len(matched) != len(records) or len(benchmarks) != len(records):
        raise CountMismatchError(benchmarks=len(benchmarks), records=len(records))

    logger.info(f'Matched {len(matched)} benchmarks with zummary entries')
    return matched
