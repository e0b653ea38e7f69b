__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

import binpacking

from zort.core.utils import percent, SECONDS_PER_HOUR

class CostEstimate:
    """
    Aggregated statistics of a packed and scheduled allocation: core
    hours, energy and monetary cost, and memory figures.
    """

    def __init__(
            self,
            tasks            : int,
            bucket_size      : int,
            sum_real         : float,
            watt_per_core    : float,
            cents_per_kwh    : float,
            available_memory : float,
            max_bucket_memory: float,
            max_record_memory: float,
            memory_limit_hits: int,
            latency          : float,
            balanced_bucket_memory : float,
        ) -> None:

        self.tasks       = tasks
        self.bucket_size = bucket_size
        self.sum_real    = sum_real

        self.core_seconds = bucket_size * sum_real
        self.core_hours   = self.core_seconds / SECONDS_PER_HOUR
        self.power_kwh    = self.core_hours * watt_per_core / 1000
        self.cost         = cents_per_kwh * self.power_kwh / 100

        self.available_memory  = available_memory
        self.max_bucket_memory = max_bucket_memory
        self.max_record_memory = max_record_memory
        self.memory_limit_hits = memory_limit_hits
        self.latency           = latency

        self.balanced_bucket_memory = balanced_bucket_memory

    @property
    def max_bucket_memory_percent(self) -> float:
        """Largest bucket memory as a percentage of available node memory."""
        return percent(self.max_bucket_memory, self.available_memory)

    @property
    def max_record_memory_percent(self) -> float:
        """Largest single run memory as a percentage of the largest bucket memory."""
        return percent(self.max_record_memory, self.max_bucket_memory)

    def to_dict(self) -> dict:
        return {
            'tasks': self.tasks,
            'bucket_size': self.bucket_size,
            'sum_real': self.sum_real,
            'core_seconds': self.core_seconds,
            'core_hours': self.core_hours,
            'power_kwh': self.power_kwh,
            'cost': self.cost,
            'available_memory': self.available_memory,
            'max_bucket_memory': self.max_bucket_memory,
            'max_bucket_memory_percent': self.max_bucket_memory_percent,
            'max_record_memory': self.max_record_memory,
            'max_record_memory_percent': self.max_record_memory_percent,
            'balanced_bucket_memory': self.balanced_bucket_memory,
            'memory_limit_hits': self.memory_limit_hits,
            'latency': self.latency,
        }

def balanced_memory(records: list, tasks: int) -> float:
    """
    Largest bin when record memories are spread over ``tasks`` bins by
    constant-bin-number bin packing, ignoring bucket capacities. Serves
    as a reference for how even the bucket memories could be.
    """
    if not records or not tasks:
        return 0.0
    bins = binpacking.to_constant_bin_number([r.memory for r in records], tasks)
    return max(sum(b) for b in bins)

def estimate_cost(
        buckets          : list,
        records          : list,
        bucket_size      : int,
        watt_per_core    : float,
        cents_per_kwh    : float,
        available_memory : float,
        latency          : float = 0.0,
    ) -> CostEstimate:
    """
    Compute the cost statistics for a set of packed buckets.

    :param buckets:         (list) Packed Bucket objects.

    :param records:         (list) All RunRecord objects.

    :param bucket_size:     (int) Cores allocated per bucket.

    :param watt_per_core:   (float) Power draw per core in Watt.

    :param cents_per_kwh:   (float) Energy price in cents per kWh.

    :param available_memory: (float) Memory in MB available on one node.

    :param latency:         (float) Completion time across all nodes.

    :returns:   A CostEstimate instance.
    """
    return CostEstimate(
        tasks=len(buckets),
        bucket_size=bucket_size,
        sum_real=sum(b.real for b in buckets),
        watt_per_core=watt_per_core,
        cents_per_kwh=cents_per_kwh,
        available_memory=available_memory,
        max_bucket_memory=max((b.memory for b in buckets), default=0.0),
        max_record_memory=max((r.memory for r in records), default=0.0),
        memory_limit_hits=sum(b.memory_limit_hits for b in buckets),
        latency=latency,
        balanced_bucket_memory=balanced_memory(records, len(buckets)),
    )
