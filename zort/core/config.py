__author__    = "Daniel Westwood"
__contact__   = "daniel.westwood@stfc.ac.uk"
__copyright__ = "Copyright 2024 United Kingdom Research and Innovation"

import os
from typing import Union

import yaml

from .errors import (
    SourceNotFoundError,
    InvalidBucketSizeError,
    InvalidNodeCountError,
    InvalidFractionError,
    InvalidOptionError,
    FileAccessError,
)
from .utils import CURRENCIES

DEFAULTS = {
    'bucket_size': 64,
    'fast_bucket_fraction': 50,
    'fast_bucket_memory': 8000.0,
    'node_count': 32,
    'available_memory': 234000.0,
    'watt_per_core': 8.0,
    'cents_per_kwh': 27.0,
    'keep_order': False,
    'generate': False,
    'currency': 'euro',
}

class AllocationConfig:
    """
    Resolved set of options for a single allocation run. Values are
    taken from the defaults, then a YAML file (if given), then any
    keyword overrides (typically from the command line).
    """

    def __init__(self, conf: Union[dict, str, None] = None, **kwargs) -> None:

        values = dict(DEFAULTS)

        if isinstance(conf, str):
            conf = self._load_config(conf)
        if conf:
            values.update(self._known(conf))

        values.update(self._known({k: v for k, v in kwargs.items() if v is not None}))

        self.bucket_size          = values['bucket_size']
        self.fast_bucket_fraction = values['fast_bucket_fraction']
        self.fast_bucket_memory   = values['fast_bucket_memory']
        self.node_count           = values['node_count']
        self.available_memory     = values['available_memory']
        self.watt_per_core        = values['watt_per_core']
        self.cents_per_kwh        = values['cents_per_kwh']
        self.keep_order           = bool(values['keep_order'])
        self.generate             = bool(values['generate'])
        self.currency             = values['currency']

        self.validate()

    def __str__(self):
        return yaml.dump(self.to_dict(), sort_keys=False, allow_unicode=True)

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in DEFAULTS}

    @property
    def currency_sign(self) -> str:
        return CURRENCIES[self.currency]

    def validate(self) -> None:
        """
        Check every option lies within its accepted range.
        """
        if not _is_int(self.bucket_size) or self.bucket_size <= 0:
            raise InvalidBucketSizeError(size=self.bucket_size)
        if not _is_int(self.node_count) or self.node_count <= 0:
            raise InvalidNodeCountError(nodes=self.node_count)
        if not _is_int(self.fast_bucket_fraction) or not 0 <= self.fast_bucket_fraction <= 100:
            raise InvalidFractionError(fraction=self.fast_bucket_fraction)

        for option in ('fast_bucket_memory', 'available_memory', 'watt_per_core', 'cents_per_kwh'):
            value = getattr(self, option)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise InvalidOptionError(
                    f"invalid value '{value}' for '{option}' (expected non-negative number)"
                )

        if self.currency not in CURRENCIES:
            raise InvalidOptionError(
                f"unknown currency '{self.currency}', must be one of {list(CURRENCIES.keys())}"
            )

    def _known(self, conf: dict) -> dict:
        unknown = [key for key in conf if key not in DEFAULTS]
        if unknown:
            raise InvalidOptionError(f'unknown option(s) {unknown}')
        return conf

    def _load_config(self, conf: str) -> Union[dict, None]:
        """
        Load a conf.yaml file to a dictionary
        """
        if not os.path.isfile(conf):
            raise SourceNotFoundError(sfile=conf, kind='config file')

        try:
            with open(conf, encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError):
            raise InvalidOptionError(f"config file '{conf}' is not valid YAML")
        except OSError as err:
            raise FileAccessError(file=conf, reason=err.strerror)

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise InvalidOptionError(f"config file '{conf}' does not contain a mapping")
        return config

def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
