# -*- coding: utf-8 -*-
"""Location: ./licensescan/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

licensescan - identify known license texts inside arbitrary documents.
"""

# First-Party
from licensescan.errors import EmptyStoreError, InternalInvariantError, LicenseScanError, StoreError, StoreLoadError
from licensescan.models import ContainedResult, IdentifiedLicense, LicenseType, ScanResult
from licensescan.store import Analysis, Store
from licensescan.strategy import ScanOptions, ScanStrategy
from licensescan.text import TextData

__copyright__ = "Copyright 2025"
__license__ = "Apache 2.0"
__version__ = "0.1.0"
__description__ = "Identify known license texts, and the licenses embedded in larger documents"
__packages__ = ["licensescan"]

__all__ = [
    "Analysis",
    "ContainedResult",
    "EmptyStoreError",
    "IdentifiedLicense",
    "InternalInvariantError",
    "LicenseScanError",
    "LicenseType",
    "ScanOptions",
    "ScanResult",
    "ScanStrategy",
    "Store",
    "StoreError",
    "StoreLoadError",
    "TextData",
]
