__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

from zort.core import LoggedOperation, ScheduledBucket
from zort.core.errors import InvalidNodeCountError

class NodeScheduler(LoggedOperation):
    """
    Greedy list scheduling of packed buckets onto a fixed pool of nodes.

    Buckets are taken shortest makespan first and each is placed on the
    node which becomes free earliest (lowest node index on ties).
    """

    def __init__(
            self,
            node_count : int = 32,
            logger     = None,
            label      : str = 'node-scheduler',
            verbose    : int = 0
        ) -> None:

        super().__init__(logger, label=label, verbose=verbose)

        if isinstance(node_count, bool) or not isinstance(node_count, int) or node_count <= 0:
            raise InvalidNodeCountError(nodes=node_count)

        self.node_count = node_count
        self.end_times  = [0.0] * node_count
        self.schedule   = []
        self.latency    = 0.0

    def run(self, buckets: list) -> list:
        """
        Place every bucket on a node.

        :param buckets:     (list) Packed Bucket objects.

        :returns:   ScheduledBucket objects in assignment order.
        """
        self.end_times = [0.0] * self.node_count
        self.schedule  = []
        self.latency   = 0.0

        for bucket in sorted(buckets, key=lambda b: b.real):
            node = min(range(self.node_count), key=lambda n: self.end_times[n])

            placed = ScheduledBucket(bucket, node, self.end_times[node])
            self.end_times[node] = placed.end
            self.latency = max(self.latency, placed.end)
            self.schedule.append(placed)

            self.logger.debug(
                f'Bucket {bucket.index} on node {node}: '
                f'{placed.start:.2f} -> {placed.end:.2f}'
            )

        self.logger.info(
            f'Scheduled {len(self.schedule)} buckets on {self.node_count} nodes '
            f'(latency {self.latency:.2f} seconds)'
        )
        return self.schedule

    def nodes(self) -> list:
        """
        Per-node view of the schedule.

        :returns:   One dict per node with its assigned bucket indices in
                    assignment order and its busy time.
        """
        summary = [
            {'node': n, 'buckets': [], 'busy': 0.0}
            for n in range(self.node_count)
        ]
        for placed in self.schedule:
            summary[placed.node_index]['buckets'].append(placed.bucket.index)
            summary[placed.node_index]['busy'] += placed.end - placed.start
        return summary
