import pytest

from zort.core import Bucket, RunRecord
from zort.core.utils import percent
from zort.operations import estimate_cost
from zort.operations.cost import balanced_memory

def packed(*members):
    """Buckets from tuples of (wall_time, memory) pairs."""
    result, records = [], []
    for idx, pairs in enumerate(members):
        bucket = Bucket(idx, len(pairs))
        for n, (wall, memory) in enumerate(pairs):
            rec = RunRecord(f'b{idx}r{n}', 10, wall, wall, memory)
            bucket.add(rec)
            records.append(rec)
        result.append(bucket)
    return result, records

class TestCostEstimate:
    def test_arithmetic(self):
        buckets, records = packed([(10, 100), (4, 50)], [(20, 300), (1, 10)])

        stats = estimate_cost(
            buckets, records,
            bucket_size=64, watt_per_core=8, cents_per_kwh=27,
            available_memory=1000, latency=20)

        assert stats.sum_real == 30
        assert stats.core_seconds == 64 * 30
        assert stats.core_hours == pytest.approx(64 * 30 / 3600)
        assert stats.power_kwh == pytest.approx(64 * 30 / 3600 * 8 / 1000)
        assert stats.cost == pytest.approx(27 * (64 * 30 / 3600 * 8 / 1000) / 100)
        assert stats.latency == 20

    def test_memory_figures(self):
        buckets, records = packed([(10, 100), (4, 50)], [(20, 300), (1, 10)])

        stats = estimate_cost(
            buckets, records,
            bucket_size=2, watt_per_core=8, cents_per_kwh=27,
            available_memory=1000)

        assert stats.max_bucket_memory == 310
        assert stats.max_record_memory == 300
        assert stats.max_bucket_memory_percent == pytest.approx(31.0)
        assert stats.max_record_memory_percent == pytest.approx(100 * 300 / 310)

    def test_zero_available_memory(self):
        buckets, records = packed([(1, 7)])

        stats = estimate_cost(
            buckets, records,
            bucket_size=1, watt_per_core=8, cents_per_kwh=27,
            available_memory=0)

        assert stats.max_bucket_memory_percent == 700

    def test_memory_limit_hits(self):
        buckets, records = packed([(1, 5)], [(1, 5)])
        records[0].memory_limit_hit = True
        buckets[0].memory_limit_hits = 1

        stats = estimate_cost(buckets, records, 1, 8, 27, 100)
        assert stats.memory_limit_hits == 1

    def test_deterministic(self):
        first = estimate_cost(*packed([(3.3, 1.1), (7.7, 2.2)]), 64, 8.5, 31.0, 234000)
        second = estimate_cost(*packed([(3.3, 1.1), (7.7, 2.2)]), 64, 8.5, 31.0, 234000)

        assert first.to_dict() == second.to_dict()

    def test_empty(self):
        stats = estimate_cost([], [], 64, 8, 27, 234000)

        assert stats.cost == 0
        assert stats.max_bucket_memory == 0
        assert stats.balanced_bucket_memory == 0

class TestPercent:
    def test_percent(self):
        assert percent(5, 10) == 50
        assert percent(5, 0) == 500

class TestBalancedMemory:
    def test_single_bin_holds_everything(self):
        _, records = packed([(1, 4), (1, 3), (1, 3), (1, 2)])
        assert balanced_memory(records, 1) == 12

    def test_bounds(self):
        _, records = packed([(1, 4), (1, 3), (1, 3), (1, 2)])
        balanced = balanced_memory(records, 2)

        assert 6 <= balanced <= 12
