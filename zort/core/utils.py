__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

import math

# Result codes of runs which terminated with a definite answer.
SUCCESS_STATUSES = (10, 20)

# Result code of a run killed for exceeding its memory limit.
MEMORY_OUT_STATUS = 2

CURRENCIES = {
    'euro': '€',
    'dollar': '$',
}

SECONDS_PER_HOUR = 3600

def percent(a: float, b: float) -> float:
    """
    Express ``a`` as a percentage of ``b``. A zero ``b`` degenerates
    to ``100 * a`` rather than failing.
    """
    return 100 * a / b if b else 100 * a

def count_tasks(total: int, bucket_size: int) -> tuple:
    """
    Number of buckets needed for ``total`` entries and the capacity of
    the last one.

    :returns:   (tasks, last_bucket_size)
    """
    tasks = math.ceil(total / bucket_size)
    if not tasks:
        return 0, 0
    return tasks, total - (tasks - 1) * bucket_size

def format_str(string: str, length: int, concat=False) -> str:
    """
    Simple function to format a string to a correct length.
    """
    string = str(string)
    if len(string) >= length and concat:
        string = string[:length-3] + '...'
    else:
        while len(string) < length:
            string += ' '
    return string[:length]
