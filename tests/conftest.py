# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Shared fixtures for the license scanner tests.
"""

# Third-Party
import pytest

# First-Party
from licensescan.config import settings
from licensescan.store import Store

LICENSE_1_TEXT = "aaaaa\nbbbbb\nccccc"
LICENSE_2_TEXT = "1234 5678 1234\n0000\n1010101010\n\n8888 9999"

# matches license-2 overall below 0.5, while its best region matches above 0.5
GIBBERISH_TEXT = "lorem\nipsum abc def ghi jkl\n1234 5678 1234\n0000\n1010101010\n\n8888 9999\nwhatsit hello\narst neio qwfp colemak is the best keyboard layout"


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop cached settings so environment changes made by a test do not leak."""
    settings.cache_clear()
    yield
    settings.cache_clear()


@pytest.fixture
def gibberish_text() -> str:
    """Made-up text hiding license-2 among unrelated lines."""
    return GIBBERISH_TEXT


@pytest.fixture
def dummy_store() -> Store:
    """A store holding two small made-up licenses."""
    store = Store()
    store.add_license("license-1", LICENSE_1_TEXT)
    store.add_license("license-2", LICENSE_2_TEXT)
    return store
