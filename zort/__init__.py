__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

__version__ = "1.0.0"

from .core import AllocationConfig, ZortException
from .operations import AllocationOperation
