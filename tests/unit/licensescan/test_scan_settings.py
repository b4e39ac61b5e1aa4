# -*- coding: utf-8 -*-
"""Location: ./tests/unit/licensescan/test_scan_settings.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for scanner settings.
"""

# Third-Party
from pydantic import ValidationError
import pytest

# First-Party
from licensescan.config import get_settings, settings, Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.confidence_threshold == 0.9
    assert s.shallow_limit == 0.99
    assert s.optimize is False
    assert s.max_passes == 10
    assert s.store_cache is None
    assert s.log_level == "INFO"


@pytest.mark.parametrize("level", ["info", "debug", "warning"])
def test_log_level_valid(level):
    assert Settings(log_level=level, _env_file=None).log_level == level.upper()


@pytest.mark.parametrize("level", ["verbose", "none"])
def test_log_level_invalid(level):
    with pytest.raises(ValidationError):
        Settings(log_level=level, _env_file=None)


@pytest.mark.parametrize("field, value", [("confidence_threshold", 1.1), ("shallow_limit", -0.5), ("max_passes", -1)])
def test_out_of_range_values_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value}, _env_file=None)


def test_misordered_thresholds_allowed():
    s = Settings(confidence_threshold=0.9, shallow_limit=0.1, max_passes=0, _env_file=None)
    assert (s.shallow_limit, s.max_passes) == (0.1, 0)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LICENSESCAN_CONFIDENCE_THRESHOLD", "0.75")
    monkeypatch.setenv("LICENSESCAN_OPTIMIZE", "true")
    monkeypatch.setenv("LICENSESCAN_STORE_CACHE", "")
    s = Settings(_env_file=None)
    assert s.confidence_threshold == 0.75
    assert s.optimize is True
    assert s.store_cache is None


def test_lazy_wrapper_reads_fresh_environment(monkeypatch):
    assert settings.max_passes == 10
    monkeypatch.setenv("LICENSESCAN_MAX_PASSES", "3")
    assert settings.max_passes == 10
    settings.cache_clear()
    assert settings.max_passes == 3
    assert get_settings() is get_settings()
