import pytest

from zort.core import Bucket, RunRecord
from zort.core.errors import InvalidNodeCountError
from zort.operations import NodeScheduler

def buckets(*reals):
    result = []
    for idx, real in enumerate(reals):
        bucket = Bucket(idx, 1)
        bucket.add(RunRecord(f'r{idx}', 10, real, real, 1.0))
        result.append(bucket)
    return result

class TestNodeScheduler:
    def test_shortest_bucket_first(self):
        scheduler = NodeScheduler(node_count=2)
        schedule = scheduler.run(buckets(5, 1, 3))

        placed = [(s.bucket.index, s.node_index, s.start, s.end) for s in schedule]
        assert placed == [
            (1, 0, 0, 1),
            (2, 1, 0, 3),
            (0, 0, 1, 6),
        ]
        assert scheduler.latency == 6

    def test_ties_go_to_lowest_node(self):
        scheduler = NodeScheduler(node_count=3)
        schedule = scheduler.run(buckets(2, 2, 2, 2))

        assert [s.node_index for s in schedule] == [0, 1, 2, 0]
        assert scheduler.latency == 4

    def test_more_nodes_than_buckets(self):
        scheduler = NodeScheduler(node_count=8)
        scheduler.run(buckets(4, 7))

        assert scheduler.latency == 7
        assert scheduler.end_times[2:] == [0.0] * 6

    def test_schedule_validity(self):
        reals = [13.5, 2, 8, 8, 21, 1, 5.25, 34, 3]
        scheduler = NodeScheduler(node_count=3)
        schedule = scheduler.run(buckets(*reals))

        assert len(schedule) == len(reals)
        assert scheduler.latency == max(s.end for s in schedule)

        for s in schedule:
            assert s.end == s.start + s.bucket.real

        for node in range(3):
            intervals = [(s.start, s.end) for s in schedule if s.node_index == node]
            for (_, end), (start, _) in zip(intervals, intervals[1:]):
                assert start >= end

    def test_node_summary(self):
        scheduler = NodeScheduler(node_count=2)
        scheduler.run(buckets(5, 1, 3))

        nodes = scheduler.nodes()
        assert nodes[0]['buckets'] == [1, 0]
        assert nodes[0]['busy'] == 6
        assert nodes[1]['buckets'] == [2]

    def test_empty(self):
        scheduler = NodeScheduler(node_count=2)
        assert scheduler.run([]) == []
        assert scheduler.latency == 0

    @pytest.mark.parametrize('nodes', [0, -1])
    def test_invalid_node_count(self, nodes):
        with pytest.raises(InvalidNodeCountError):
            NodeScheduler(node_count=nodes)
