import logging

import pytest

from srtf_scheduler.config import SchedulerConfig


def test_from_mapping_accepts_legacy_keys():
    config = SchedulerConfig.from_mapping({"timeSlice": 3, "verbose": 1, "tick_period": 0.1})
    assert config.time_slice == 3
    assert config.verbose == 1
    assert config.tick_period == 0.1
    assert config.tick_increment == 0.5


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValueError):
        SchedulerConfig.from_mapping({"quantum": 2})


def test_invalid_tick_rejected():
    with pytest.raises(ValueError):
        SchedulerConfig(tick_period=0)


def test_verbose_maps_to_log_level():
    assert SchedulerConfig().log_level == logging.WARNING
    assert SchedulerConfig(verbose=1).log_level == logging.INFO
    assert SchedulerConfig(verbose=6).log_level == logging.DEBUG
