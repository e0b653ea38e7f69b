__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

import math

from .errors import CapacityExceededError, DoubleScheduledError
from .utils import MEMORY_OUT_STATUS

class BenchmarkDescriptor:
    """One line of the benchmark list."""

    def __init__(self, order: int, name: str, path: str = None) -> None:
        self.order = order
        self.path  = path
        self.name  = name

    def __str__(self):
        return self.line()

    def __repr__(self):
        return f'BenchmarkDescriptor({self.order}, {self.name!r}, path={self.path!r})'

    def line(self, order: int = None) -> str:
        """
        Render in the benchmark list format, optionally with a new order number.
        """
        if order is None:
            order = self.order
        if self.path is None:
            return f'{order} {self.name}'
        return f'{order} {self.path} {self.name}'

class Limit:
    """Resource limits a run was executed under. Unset limits are unbounded."""

    def __init__(self, time: float = math.inf, wall: float = math.inf, memory: float = math.inf) -> None:
        self.time   = time
        self.wall   = wall
        self.memory = memory

class RunRecord:
    """
    A zummary entry: the measured outcome of running one benchmark.

    ``benchmark`` holds the name of the matching benchmark once the
    matcher has paired the two, not the descriptor itself.
    """

    def __init__(
            self,
            name     : str,
            status   : int,
            cpu_time : float,
            wall_time: float,
            memory   : float,
            limit    : Limit = None,
        ) -> None:

        self.name      = name
        self.status    = status
        self.cpu_time  = cpu_time
        self.wall_time = wall_time
        self.memory    = memory
        self.limit     = limit or Limit()

        self.benchmark        = None
        self.scheduled        = False
        self.memory_limit_hit = False

    def __repr__(self):
        return (
            f'RunRecord({self.name!r}, status={self.status}, '
            f'wall_time={self.wall_time}, memory={self.memory})'
        )

    @property
    def exceeds_memory_limit(self) -> bool:
        return self.status == MEMORY_OUT_STATUS or self.memory >= self.limit.memory

class Bucket:
    """
    A fixed-capacity group of runs executed in parallel as one task.
    Members are references into the zummary collection.
    """

    def __init__(self, index: int, capacity: int) -> None:
        self.index    = index
        self.capacity = capacity
        self.members  = []

        self.real   = 0.0
        self.memory = 0.0
        self.memory_limit_hits = 0

    def __len__(self):
        return len(self.members)

    def __iter__(self):
        for record in self.members:
            yield record

    def __repr__(self):
        return (
            f'Bucket({self.index}, {len(self)}/{self.capacity}, '
            f'real={self.real}, memory={self.memory})'
        )

    @property
    def full(self) -> bool:
        return len(self.members) >= self.capacity

    def add(self, record: RunRecord) -> None:
        """
        Append a record and update the makespan, memory and
        memory-limit statistics of this bucket.
        """
        if self.full:
            raise CapacityExceededError(bucket=self.index, capacity=self.capacity)
        if record.scheduled:
            raise DoubleScheduledError(name=record.name)

        self.members.append(record)
        self.real = max(self.real, record.wall_time)
        self.memory += record.memory

        if record.exceeds_memory_limit:
            record.memory_limit_hit = True
            self.memory_limit_hits += 1

        record.scheduled = True

class ScheduledBucket:
    """Placement of one bucket on a node."""

    def __init__(self, bucket: Bucket, node_index: int, start: float) -> None:
        self.bucket     = bucket
        self.node_index = node_index
        self.start      = start
        self.end        = start + bucket.real

    def __repr__(self):
        return (
            f'ScheduledBucket(bucket={self.bucket.index}, node={self.node_index}, '
            f'start={self.start}, end={self.end})'
        )
