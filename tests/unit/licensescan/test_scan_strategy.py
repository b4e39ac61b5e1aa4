# -*- coding: utf-8 -*-
"""Location: ./tests/unit/licensescan/test_scan_strategy.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Unit tests for ScanStrategy.
"""

# Standard
from unittest.mock import MagicMock

# Third-Party
from pydantic import ValidationError
import pytest

# First-Party
from licensescan.config import Settings
from licensescan.errors import EmptyStoreError, InternalInvariantError
from licensescan.models import LicenseType
from licensescan.store import Analysis, Store
from licensescan.strategy import ScanOptions, ScanStrategy
from licensescan.text import TextData

SHALLOW_TEXT = "lorem ipsum\naaaaa bbbbb\nccccc\nhello"


def _optimizing(store: Store) -> ScanStrategy:
    return ScanStrategy(store).with_confidence_threshold(0.5).with_optimize(True).with_shallow_limit(1.0)


def test_can_construct(dummy_store):
    ScanStrategy(dummy_store)
    ScanStrategy(dummy_store).with_confidence_threshold(0.5)
    strategy = ScanStrategy(dummy_store).with_shallow_limit(0.99).with_optimize(True).with_max_passes(100)
    assert strategy.options == ScanOptions(confidence_threshold=0.9, shallow_limit=0.99, optimize=True, max_passes=100)
    assert strategy.store is dummy_store


def test_defaults(dummy_store):
    opts = ScanStrategy(dummy_store).options
    assert (opts.confidence_threshold, opts.shallow_limit, opts.optimize, opts.max_passes) == (0.9, 0.99, False, 10)


def test_setters_return_new_strategy(dummy_store):
    base = ScanStrategy(dummy_store)
    changed = base.with_optimize(True)
    assert changed is not base
    assert base.options.optimize is False
    assert changed.options.optimize is True


@pytest.mark.parametrize("threshold", [-0.1, 1.5])
def test_threshold_out_of_range_rejected(dummy_store, threshold):
    with pytest.raises(ValidationError):
        ScanStrategy(dummy_store).with_confidence_threshold(threshold)


def test_from_settings(dummy_store):
    cfg = Settings(confidence_threshold=0.4, shallow_limit=0.95, optimize=True, max_passes=3, _env_file=None)
    opts = ScanStrategy.from_settings(dummy_store, cfg).options
    assert (opts.confidence_threshold, opts.shallow_limit, opts.optimize, opts.max_passes) == (0.4, 0.95, True, 3)


def test_from_settings_reads_environment(dummy_store, monkeypatch):
    monkeypatch.setenv("LICENSESCAN_OPTIMIZE", "true")
    monkeypatch.setenv("LICENSESCAN_MAX_PASSES", "4")
    opts = ScanStrategy.from_settings(dummy_store).options
    assert opts.optimize is True
    assert opts.max_passes == 4


def test_shallow_scan(dummy_store):
    text = TextData(SHALLOW_TEXT)

    result = ScanStrategy(dummy_store).with_confidence_threshold(0.5).with_shallow_limit(0.0).scan(text)
    assert result.score > 0.5, f"score must meet threshold; was {result.score}"
    assert result.license is not None
    assert result.license.name == "license-1"
    assert result.license.kind == LicenseType.TEXT

    result = ScanStrategy(dummy_store).with_confidence_threshold(0.8).with_shallow_limit(0.0).scan(text)
    assert result.license is None


def test_single_optimize(dummy_store, gibberish_text):
    result = _optimizing(dummy_store).scan(TextData(gibberish_text))

    assert result.license is None
    assert result.score <= 0.5
    assert len(result.containing) == 1
    contained = result.containing[0]
    assert contained.license.name == "license-2"
    assert contained.score > 0.5
    assert contained.line_range == (2, 7)


def test_find_multiple_licenses(dummy_store, gibberish_text):
    text = TextData(gibberish_text + "\naaaaa\nbbbbb\nccccc")
    result = _optimizing(dummy_store).scan(text)

    assert result.license is None
    assert len(result.containing) == 2
    found = {c.license.name: c for c in result.containing}
    assert set(found) == {"license-1", "license-2"}
    assert all(c.score > 0.5 for c in result.containing)
    assert found["license-2"].line_range == (2, 7)
    assert found["license-1"].line_range == (9, 12)


def test_overall_score_not_changed_by_optimization(dummy_store, gibberish_text):
    text = TextData(gibberish_text)
    plain = ScanStrategy(dummy_store).with_confidence_threshold(0.5).with_shallow_limit(1.0).scan(text)
    optimized = _optimizing(dummy_store).scan(text)
    assert plain.score == optimized.score
    assert plain.containing == []


def test_no_optimize_never_contains(dummy_store, gibberish_text):
    text = TextData(gibberish_text + "\naaaaa\nbbbbb\nccccc")
    result = ScanStrategy(dummy_store).with_confidence_threshold(0.5).with_shallow_limit(1.0).scan(text)
    assert result.containing == []


@pytest.mark.parametrize("max_passes, expected", [(0, []), (1, ["license-2"]), (2, ["license-2", "license-1"])])
def test_max_passes_bounds_results(dummy_store, gibberish_text, max_passes, expected):
    text = TextData(gibberish_text + "\naaaaa\nbbbbb\nccccc")
    result = _optimizing(dummy_store).with_max_passes(max_passes).scan(text)
    assert [c.license.name for c in result.containing] == expected


def test_fast_exit_takes_precedence_over_optimize(dummy_store):
    text = TextData("aaaaa\nbbbbb\nccccc")
    result = ScanStrategy(dummy_store).with_optimize(True).scan(text)
    assert result.score == 1.0
    assert result.license.name == "license-1"
    assert result.containing == []


def test_perfect_match_optimizes_when_shallow_limit_is_one(dummy_store):
    text = TextData("aaaaa\nbbbbb\nccccc")
    result = ScanStrategy(dummy_store).with_optimize(True).with_shallow_limit(1.0).scan(text)
    assert result.license.name == "license-1"
    assert [(c.license.name, c.line_range) for c in result.containing] == [("license-1", (0, 3))]


def test_score_equal_to_threshold_is_not_reported_but_region_is_kept(dummy_store):
    strategy = ScanStrategy(dummy_store).with_confidence_threshold(1.0).with_shallow_limit(1.0).with_optimize(True)
    result = strategy.scan(TextData("aaaaa\nbbbbb\nccccc"))
    assert result.score == 1.0
    assert result.license is None
    assert [c.line_range for c in result.containing] == [(0, 3)]
    assert result.containing[0].score == 1.0


def test_shallow_limit_below_threshold_exits_on_any_reported_match(dummy_store):
    result = ScanStrategy(dummy_store).with_confidence_threshold(0.5).with_shallow_limit(0.0).with_optimize(True).scan(TextData(SHALLOW_TEXT))
    assert result.license.name == "license-1"
    assert result.containing == []


def test_zero_threshold_stops_on_empty_region(dummy_store):
    result = ScanStrategy(dummy_store).with_confidence_threshold(0.0).with_optimize(True).scan(TextData("hello world"))
    assert result.score == 0.0
    assert result.license is None
    assert result.containing == []


def test_results_are_deterministic(dummy_store, gibberish_text):
    strategy = _optimizing(dummy_store)
    text = gibberish_text + "\naaaaa\nbbbbb\nccccc"
    first = strategy.scan(TextData(text))
    second = strategy.scan(TextData(text))
    assert first == second
    assert first.to_json() == second.to_json()


def test_result_properties_hold(dummy_store, gibberish_text):
    text = TextData(gibberish_text + "\naaaaa\nbbbbb\nccccc")
    strategy = _optimizing(dummy_store).with_max_passes(5)
    result = strategy.scan(text)
    assert 0.0 <= result.score <= 1.0
    assert (result.license is not None) == (result.score > strategy.options.confidence_threshold)
    assert len(result.containing) <= strategy.options.max_passes
    for contained in result.containing:
        start, end = contained.line_range
        assert 0 <= start < end <= text.line_count()


def test_empty_store_fails(dummy_store):
    with pytest.raises(EmptyStoreError):
        ScanStrategy(Store()).scan(TextData("anything"))


def _analysis(name: str, score: float) -> Analysis:
    return Analysis(score=score, name=name, license_type=LicenseType.HEADER, data=MagicMock(spec=TextData))


def test_region_attributed_to_driving_analysis():
    first, second = _analysis("driver", 0.3), _analysis("next", 0.2)
    store = MagicMock(spec=Store)
    store.analyze.side_effect = [first, second]

    masked = MagicMock(spec=TextData)
    masked.optimize_bounds.return_value = (MagicMock(spec=TextData), 0.1)
    view = MagicMock(spec=TextData)
    view.lines_view.return_value = (1, 4)
    view.white_out.return_value = masked
    text = MagicMock(spec=TextData)
    text.optimize_bounds.return_value = (view, 0.95)

    result = ScanStrategy(store).with_confidence_threshold(0.5).with_optimize(True).scan(text)

    text.optimize_bounds.assert_called_once_with(first.data)
    masked.optimize_bounds.assert_called_once_with(second.data)
    store.analyze.assert_called_with(masked)
    assert len(result.containing) == 1
    contained = result.containing[0]
    assert (contained.license.name, contained.license.kind, contained.line_range, contained.score) == ("driver", LicenseType.HEADER, (1, 4), 0.95)


def test_view_without_range_is_internal_error():
    store = MagicMock(spec=Store)
    store.analyze.return_value = _analysis("driver", 0.3)
    view = MagicMock(spec=TextData)
    view.lines_view.return_value = None
    text = MagicMock(spec=TextData)
    text.optimize_bounds.return_value = (view, 0.95)

    with pytest.raises(InternalInvariantError):
        ScanStrategy(store).with_confidence_threshold(0.5).with_optimize(True).scan(text)


def test_query_failure_mid_loop_propagates():
    store = MagicMock(spec=Store)
    store.analyze.side_effect = [_analysis("driver", 0.3), EmptyStoreError()]
    view = MagicMock(spec=TextData)
    view.lines_view.return_value = (0, 2)
    text = MagicMock(spec=TextData)
    text.optimize_bounds.return_value = (view, 0.95)

    with pytest.raises(EmptyStoreError):
        ScanStrategy(store).with_confidence_threshold(0.5).with_optimize(True).scan(text)
