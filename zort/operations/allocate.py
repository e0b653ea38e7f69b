__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

# Bucket Allocation
# - Number of buckets is ceil(N / bucket_size), last bucket holds the remainder.
#
# Phase A - Fast lane
# - Sort by wall time (then memory), smallest first.
# - Successful, memory-light runs fill the first buckets in order.
#
# Phase B - Memory balancing
# - Sort remaining by memory (then wall time).
# - Largest first, rotating forward over buckets starting at the last one,
#   skipping full buckets.

from zort.core import LoggedOperation, Bucket
from zort.core.errors import (
    InvalidBucketSizeError,
    InvalidFractionError,
    IncompleteSchedulingError,
    CapacityExceededError,
)
from zort.core.utils import SUCCESS_STATUSES, count_tasks

class BucketPacker(LoggedOperation):
    """
    Packs matched zummary entries into buckets. One packer holds the
    state of a single packing run (buckets and scheduled counter).
    """

    def __init__(
            self,
            bucket_size          : int = 64,
            fast_bucket_fraction : int = 50,
            fast_bucket_memory   : float = 8000.0,
            keep_order           : bool = False,
            logger               = None,
            label                : str = 'bucket-packer',
            verbose              : int = 0
        ) -> None:
        """
        :param bucket_size:             (int) Number of runs per bucket (cores per task).

        :param fast_bucket_fraction:    (int) Percentage of buckets reserved for the fast lane.

        :param fast_bucket_memory:      (float) Memory threshold in MB for fast lane runs.

        :param keep_order:              (bool) Fill buckets in benchmark order without sorting.
        """
        super().__init__(logger, label=label, verbose=verbose)

        if isinstance(bucket_size, bool) or not isinstance(bucket_size, int) or bucket_size <= 0:
            raise InvalidBucketSizeError(size=bucket_size)
        if not 0 <= fast_bucket_fraction <= 100:
            raise InvalidFractionError(fraction=fast_bucket_fraction)

        self.bucket_size          = bucket_size
        self.fast_bucket_fraction = fast_bucket_fraction
        self.fast_bucket_memory   = fast_bucket_memory
        self.keep_order           = keep_order

        self.buckets   = []
        self.scheduled = 0
        self.total     = 0

    @property
    def tasks(self) -> int:
        return len(self.buckets)

    @property
    def last_bucket_size(self) -> int:
        if not self.buckets:
            return 0
        return self.buckets[-1].capacity

    def pack(self, records: list) -> list:
        """
        Assign every record to exactly one bucket.

        :param records:     (list) Matched RunRecord objects in benchmark list order.

        :returns:   The list of buckets.
        """
        self.total = len(records)
        self.scheduled = 0

        tasks, last_bucket_size = count_tasks(self.total, self.bucket_size)
        self.buckets = [Bucket(idx, self.bucket_size) for idx in range(tasks)]
        if self.buckets:
            self.buckets[-1].capacity = last_bucket_size

        self.logger.info(
            f'Packing {self.total} entries into {tasks} buckets '
            f'(last bucket size {last_bucket_size})'
        )

        if self.keep_order:
            self._pack_in_order(records)
        else:
            self._pack_fast_lane(records)
            self._pack_memory_balanced(records)

        if self.scheduled != self.total:
            raise IncompleteSchedulingError(scheduled=self.scheduled, total=self.total)

        return self.buckets

    def _schedule(self, bucket: Bucket, record) -> None:
        bucket.add(record)
        self.scheduled += 1
        self.logger.debug(
            f'Bucket {bucket.index} <- {record.name} '
            f'(real {record.wall_time:.2f}, memory {record.memory:.2f})'
        )

    def _pack_in_order(self, records: list) -> None:
        current = 0
        for record in records:
            if self.buckets[current].full:
                current += 1
            self._schedule(self.buckets[current], record)

    def _pack_fast_lane(self, records: list) -> None:
        limit = self.fast_bucket_fraction * self.tasks // 100
        if not limit:
            self.logger.info('No fast lane buckets')
            return

        candidates = sorted(
            [r for r in records if not r.scheduled],
            key=lambda r: (r.wall_time, r.memory)
        )

        current = 0
        for record in candidates:
            if record.status not in SUCCESS_STATUSES:
                continue
            if record.memory > self.fast_bucket_memory:
                continue
            bucket = self.buckets[current]
            self._schedule(bucket, record)
            if bucket.full:
                current += 1
                if current == limit:
                    break

        self.logger.info(f'Fast lane scheduled {self.scheduled} entries into up to {limit} buckets')

    def _pack_memory_balanced(self, records: list) -> None:
        remaining = sorted(
            [r for r in records if not r.scheduled],
            key=lambda r: (r.memory, r.wall_time)
        )
        if not remaining:
            return

        current = self.tasks - 1
        for record in reversed(remaining):
            current = self._next_open(current)
            self._schedule(self.buckets[current], record)
            current = (current + 1) % self.tasks

        self.logger.info(f'Memory balancing scheduled {len(remaining)} remaining entries')

    def _next_open(self, current: int) -> int:
        """
        First bucket with spare capacity, starting at ``current`` and
        rotating forward.
        """
        for _ in range(self.tasks):
            if not self.buckets[current].full:
                return current
            current = (current + 1) % self.tasks
        raise CapacityExceededError(bucket=current, capacity=self.buckets[current].capacity)
