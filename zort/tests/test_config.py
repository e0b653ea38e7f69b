import pytest

from zort.core import AllocationConfig
from zort.core.config import DEFAULTS
from zort.core.errors import (
    ConfigurationError,
    InvalidBucketSizeError,
    InvalidNodeCountError,
    InvalidFractionError,
    InvalidOptionError,
    SourceNotFoundError,
)

class TestAllocationConfig:
    def test_defaults(self):
        config = AllocationConfig()

        assert config.to_dict() == DEFAULTS
        assert config.bucket_size == 64
        assert config.node_count == 32
        assert config.currency_sign == '€'

    def test_yaml_then_overrides(self, tmp_path):
        conf = tmp_path / 'zort.yaml'
        conf.write_text('bucket_size: 16\nnode_count: 4\ncurrency: dollar\n')

        config = AllocationConfig(str(conf), node_count=8, watt_per_core=None)

        assert config.bucket_size == 16
        assert config.node_count == 8
        assert config.watt_per_core == DEFAULTS['watt_per_core']
        assert config.currency_sign == '$'

    def test_empty_yaml(self, tmp_path):
        conf = tmp_path / 'zort.yaml'
        conf.write_text('')

        assert AllocationConfig(str(conf)).to_dict() == DEFAULTS

    def test_dict_conf(self):
        config = AllocationConfig({'keep_order': True, 'generate': True})
        assert config.keep_order
        assert config.generate

    def test_missing_yaml(self, tmp_path):
        with pytest.raises(SourceNotFoundError):
            AllocationConfig(str(tmp_path / 'absent.yaml'))

    @pytest.mark.parametrize('kwargs,error', [
        ({'bucket_size': 0}, InvalidBucketSizeError),
        ({'bucket_size': 2.5}, InvalidBucketSizeError),
        ({'node_count': -1}, InvalidNodeCountError),
        ({'fast_bucket_fraction': 101}, InvalidFractionError),
        ({'fast_bucket_fraction': -1}, InvalidFractionError),
        ({'available_memory': -5.0}, InvalidOptionError),
        ({'currency': 'yen'}, InvalidOptionError),
        ({'buckets': 3}, InvalidOptionError),
    ])
    def test_invalid(self, kwargs, error):
        with pytest.raises(error):
            AllocationConfig(**kwargs)

    def test_configuration_errors_share_base(self):
        with pytest.raises(ConfigurationError):
            AllocationConfig(node_count=0)

    def test_str(self):
        assert 'bucket_size: 64' in str(AllocationConfig())
