# -*- coding: utf-8 -*-
"""Root conftest.py for pytest configuration.

Strips LICENSESCAN_* variables from the environment before anything is
collected, so doctests and unit tests see the documented defaults regardless
of the host shell.
"""

# Standard
import os

ENV_PREFIX = "LICENSESCAN_"


def _force_default_settings() -> None:
    """Remove scanner settings inherited from the host environment."""
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            del os.environ[key]


_force_default_settings()
