__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

import logging

from zort.core import (
    LoggedOperation,
    FalseLogger,
    AllocationConfig,
    BenchmarksFile,
    ZummaryFile,
)

from .match import match_records
from .allocate import BucketPacker
from .schedule import NodeScheduler
from .cost import estimate_cost
from .report import assemble_report, Report

class AllocationOperation(LoggedOperation):
    """
    A single allocation run. Owns the benchmark and zummary collections,
    the packed buckets and the node schedule for one invocation, so
    separate operations never share state.
    """

    def __init__(
            self,
            benchmarks : list,
            records    : list,
            config     : AllocationConfig = None,
            logger     : logging.Logger | FalseLogger = None,
            label      : str = 'allocate',
            logid      : str = None,
            verbose    : int = 0,
        ) -> None:
        """
        :param benchmarks:  (list) BenchmarkDescriptor objects in benchmark list order.

        :param records:     (list) RunRecord objects from the zummary.

        :param config:      (AllocationConfig) Resolved options, defaults if not given.

        :param logger:      (logging.Logger | FalseLogger) An existing logger object.

        :param label:       (str) The label to apply to the logger object.

        :param logid:       (str) ID of this run, appended to the logger name.

        :param verbose:     (int) Level of verbosity for log messages (see core.init_logger).

        :returns: None
        """
        super().__init__(logger, label=label, logid=logid, verbose=verbose)

        self.config     = config or AllocationConfig()
        self.benchmarks = benchmarks
        self.records    = records

        self.matched   = None
        self.packer    = None
        self.scheduler = None
        self.report    = None

    @classmethod
    def from_files(cls, benchmarks_path: str, directory: str, config: AllocationConfig = None, **kwargs):
        """
        Read the benchmark list and ``<directory>/zummary`` and create an
        operation for them.
        """
        operation = cls([], [], config=config, **kwargs)
        operation.benchmarks = BenchmarksFile(benchmarks_path, logger=operation.logger).parse()
        operation.records = ZummaryFile.from_directory(directory, logger=operation.logger).parse()
        return operation

    @property
    def buckets(self) -> list:
        if self.packer is None:
            return []
        return self.packer.buckets

    def run(self) -> Report:
        """
        Match, pack, schedule and cost the allocation.

        :returns:   The assembled Report.
        """
        conf = self.config
        self.logger.debug(f'Using configuration:\n{conf}')

        self.matched = match_records(self.benchmarks, self.records, logger=self.logger)

        self.packer = BucketPacker(
            bucket_size=conf.bucket_size,
            fast_bucket_fraction=conf.fast_bucket_fraction,
            fast_bucket_memory=conf.fast_bucket_memory,
            keep_order=conf.keep_order,
            logger=self.logger,
        )
        buckets = self.packer.pack(self.matched)

        self.scheduler = NodeScheduler(node_count=conf.node_count, logger=self.logger)
        self.scheduler.run(buckets)

        statistics = estimate_cost(
            buckets,
            self.matched,
            bucket_size=conf.bucket_size,
            watt_per_core=conf.watt_per_core,
            cents_per_kwh=conf.cents_per_kwh,
            available_memory=conf.available_memory,
            latency=self.scheduler.latency,
        )
        self.logger.info(
            f'{statistics.core_hours:.2f} core hours, {statistics.power_kwh:.2f} kWh, '
            f'cost {conf.currency_sign}{statistics.cost:.2f}'
        )

        self.report = assemble_report(
            buckets,
            self.scheduler,
            statistics,
            benchmarks=self.benchmarks,
            generate=conf.generate,
            currency=conf.currency_sign,
        )
        return self.report
