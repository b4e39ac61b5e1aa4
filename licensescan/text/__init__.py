# -*- coding: utf-8 -*-
"""Location: ./licensescan/text/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Text normalization, fingerprinting and line-range views.
"""

# First-Party
from licensescan.text.ngram import NgramSet
from licensescan.text.text_data import TextData

__all__ = ["NgramSet", "TextData"]
