__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

import argparse
import sys

from zort.core import init_logger, AllocationConfig, TextFileHandler
from zort.core.errors import ZortException
from zort.core.utils import CURRENCIES
from zort.operations import AllocationOperation, format_report

def _get_cmdline_args(argv=None) -> dict:
    """
    Get command line arguments passed to zort
    """

    parser = argparse.ArgumentParser(
        prog='zort',
        description='Pack benchmark runs into buckets, schedule them on nodes and estimate the cost.')
    parser.add_argument('benchmarks', type=str, help='Benchmark list file')
    parser.add_argument('directory',  type=str, help='Results directory containing the "zummary" file')

    parser.add_argument('-b','--bucket-size',   dest='bucket_size',          type=int,   help='Runs per bucket (default 64)')
    parser.add_argument('-f','--fast-fraction', dest='fast_bucket_fraction', type=int,   help='Percentage of fast lane buckets (default 50)')
    parser.add_argument('-F','--fast-memory',   dest='fast_bucket_memory',   type=float, help='Memory limit in MB for fast lane runs (default 8000)')
    parser.add_argument('-n','--nodes',         dest='node_count',           type=int,   help='Number of nodes (default 32)')
    parser.add_argument('-m','--memory',        dest='available_memory',     type=float, help='Available memory per node in MB (default 234000)')
    parser.add_argument('-w','--watt-per-core', dest='watt_per_core',        type=float, help='Power draw per core in Watt (default 8)')
    parser.add_argument('-c','--cents-per-kwh', dest='cents_per_kwh',        type=float, help='Energy price in cents per kWh (default 27)')

    parser.add_argument('-k','--keep-order', dest='keep_order', action='store_true', default=None, help='Keep original benchmark order (statistics only)')
    parser.add_argument('-g','--generate',   dest='generate',   action='store_true', default=None, help='Generate the reordered benchmark list')
    parser.add_argument('-o','--output',     dest='output',     help='Write the reordered benchmark list to this file instead of standard output')
    parser.add_argument('--force',           dest='forceful',   action='store_true', help='Overwrite an existing output file')

    currency = parser.add_mutually_exclusive_group()
    for name in CURRENCIES:
        currency.add_argument(f'--{name}', dest='currency', action='store_const', const=name, help=f'Report cost in {name}')

    parser.add_argument('--config', dest='conf', help='YAML file with default options')
    parser.add_argument('-v','--verbose', dest='verbose', action='count', default=0, help='Set level of verbosity for logs')

    args = parser.parse_args(argv)

    return {
        'benchmarks': args.benchmarks,
        'directory': args.directory,
        'output': args.output,
        'forceful': args.forceful,
        'conf': args.conf,
        'verbose': args.verbose,
        'options': {
            'bucket_size': args.bucket_size,
            'fast_bucket_fraction': args.fast_bucket_fraction,
            'fast_bucket_memory': args.fast_bucket_memory,
            'node_count': args.node_count,
            'available_memory': args.available_memory,
            'watt_per_core': args.watt_per_core,
            'cents_per_kwh': args.cents_per_kwh,
            'keep_order': args.keep_order,
            'generate': args.generate,
            'currency': args.currency,
        },
    }

def run(kwargs: dict) -> int:
    """
    Run a complete allocation from parsed command line arguments.

    :returns:   Process exit status.
    """
    logger = init_logger(kwargs['verbose'], 'zort')

    try:
        config = AllocationConfig(kwargs['conf'], **kwargs['options'])

        operation = AllocationOperation.from_files(
            kwargs['benchmarks'],
            kwargs['directory'],
            config=config,
            logger=logger)
        report = operation.run()

        if report.reordered is not None and kwargs['output']:
            output = TextFileHandler(kwargs['output'], logger=logger, forceful=kwargs['forceful'])
            output.set(report.reordered)
            output.save_file()
            logger.info(f'Written reordered benchmark list to "{output.filepath}"')

    except ZortException as err:
        sys.stderr.write(f'zort: error: {err}\n')
        return 1
    except MemoryError:
        sys.stderr.write('zort: error: out-of-memory\n')
        return 1

    if report.reordered is not None and not kwargs['output']:
        for line in report.reordered:
            print(line)
    else:
        print(format_report(report, members=kwargs['verbose'] > 1))
    return 0

def main(argv=None):

    kwargs = _get_cmdline_args(argv)
    sys.exit(run(kwargs))

if __name__ == '__main__':
    main()
