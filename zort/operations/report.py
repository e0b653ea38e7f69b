__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

from types import MappingProxyType

import yaml

from zort.core.utils import format_str, SECONDS_PER_HOUR

class Report:
    """
    Immutable result of an allocation run, consumed by the printer.
    Every entry is a read-only mapping copied from the live objects, so
    later changes to buckets or statistics do not show through.
    """

    def __init__(
            self,
            buckets    : list,
            schedule   : list,
            nodes      : list,
            statistics,
            reordered  : list = None,
            currency   : str = '€',
        ) -> None:

        self._buckets = tuple(
            MappingProxyType({
                'index': b.index,
                'real': b.real,
                'memory': b.memory,
                'memory_limit_hits': b.memory_limit_hits,
                'members': tuple(
                    MappingProxyType({
                        'name': r.name,
                        'wall_time': r.wall_time,
                        'memory': r.memory,
                        'memory_limit_hit': r.memory_limit_hit,
                    }) for r in b.members
                ),
            }) for b in buckets
        )
        self._schedule = tuple(
            MappingProxyType({
                'bucket': s.bucket.index,
                'node': s.node_index,
                'start': s.start,
                'end': s.end,
            }) for s in schedule
        )
        self._nodes = tuple(
            MappingProxyType({'node': n['node'], 'buckets': tuple(n['buckets']), 'busy': n['busy']})
            for n in nodes
        )
        self._statistics = MappingProxyType(statistics.to_dict())
        self._reordered  = tuple(reordered) if reordered is not None else None
        self._currency   = currency

    def __str__(self):
        return yaml.dump(self.to_dict(), sort_keys=False, allow_unicode=True)

    @property
    def buckets(self) -> tuple:
        return self._buckets

    @property
    def schedule(self) -> tuple:
        return self._schedule

    @property
    def nodes(self) -> tuple:
        return self._nodes

    @property
    def statistics(self) -> MappingProxyType:
        return self._statistics

    @property
    def reordered(self) -> tuple:
        return self._reordered

    @property
    def currency(self) -> str:
        return self._currency

    @property
    def latency(self) -> float:
        return self._statistics['latency']

    def to_dict(self) -> dict:
        return {
            'statistics': dict(self._statistics),
            'buckets': [
                {k: v for k, v in b.items() if k != 'members'} for b in self._buckets
            ],
            'schedule': [dict(s) for s in self._schedule],
        }

def reorder_benchmarks(buckets: list, benchmarks: list) -> list:
    """
    Benchmark list lines in final bucket order. Order numbers are
    reassigned consecutively from the smallest original one.

    :param buckets:     (list) Packed Bucket objects.

    :param benchmarks:  (list) BenchmarkDescriptor objects.

    :returns:   List of lines in the benchmark list format.
    """
    by_name = {b.name: b for b in benchmarks}
    first = min((b.order for b in benchmarks), default=0)

    lines = []
    for bucket in buckets:
        for record in bucket:
            lines.append(by_name[record.benchmark].line(order=first + len(lines)))
    return lines

def assemble_report(buckets, scheduler, statistics, benchmarks=None, generate=False, currency='€') -> Report:
    """
    Collect buckets, node schedule and statistics into a Report.
    """
    reordered = None
    if generate:
        reordered = reorder_benchmarks(buckets, benchmarks or [])
    return Report(
        buckets,
        scheduler.schedule,
        scheduler.nodes(),
        statistics,
        reordered=reordered,
        currency=currency,
    )

def format_report(report: Report, members: bool = False) -> str:
    """
    Render the statistics of a report as text.

    :param report:      (Report) Result of an allocation run.

    :param members:     (bool) Also list the runs within each bucket.

    :returns:   Multi-line string.
    """
    stats = report.statistics
    lines = []

    for bucket in report.buckets:
        lines.append(
            f"bucket {bucket['index']:5d} "
            f"real {bucket['real']:10.2f} seconds "
            f"memory {bucket['memory']:10.2f} MB"
        )
        if members:
            for member in bucket['members']:
                hit = ' memory-limit-hit' if member['memory_limit_hit'] else ''
                lines.append(
                    f"  {member['wall_time']:10.2f} {member['memory']:10.2f} "
                    f"{format_str(member['name'], 40, concat=True)}{hit}".rstrip()
                )

    lines += [
        f"maximum bucket memory {stats['max_bucket_memory']:.2f} MB "
        f"({stats['max_bucket_memory_percent']:.2f}% of available {stats['available_memory']:.0f} MB)",
        f"maximum single memory {stats['max_record_memory']:.2f} MB "
        f"({stats['max_record_memory_percent']:.2f}% of maximum bucket memory)",
        f"balanced bucket memory {stats['balanced_bucket_memory']:.2f} MB",
        f"memory limit hits {stats['memory_limit_hits']}",
        f"total {stats['core_hours']:.2f} core hours",
        f"power {stats['power_kwh']:.2f} kWh",
        f"latency {report.latency:.2f} seconds ({report.latency / SECONDS_PER_HOUR:.2f} hours) on {len(report.nodes)} nodes",
        f"cost {report.currency}{stats['cost']:.2f}",
    ]
    return '\n'.join(lines)
