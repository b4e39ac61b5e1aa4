# -*- coding: utf-8 -*-
"""Location: ./licensescan/errors.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Exceptions raised by the license scanner.

User-facing failures derive from :class:`LicenseScanError`. A broken contract
between two internal collaborators raises :class:`InternalInvariantError`,
which deliberately sits outside that hierarchy so callers catching
``LicenseScanError`` never mask a bug.
"""


class LicenseScanError(Exception):
    """Base class for all user-facing scanner errors.

    Examples:
        >>> issubclass(StoreError, LicenseScanError)
        True
        >>> issubclass(InternalInvariantError, LicenseScanError)
        False
    """


class StoreError(LicenseScanError):
    """Raised when the license registry cannot serve a request."""


class EmptyStoreError(StoreError):
    """Raised when a store with no registered licenses is queried.

    Examples:
        >>> str(EmptyStoreError())
        'license store is empty'
    """

    def __init__(self, message: str = "license store is empty"):
        """Initialize the error.

        Args:
            message: Human readable description.
        """
        super().__init__(message)


class StoreLoadError(StoreError):
    """Raised when license data cannot be loaded from disk.

    Attributes:
        path (str): the file or directory that failed to load.
        message (str): the failure reason.
    """

    def __init__(self, path: str, message: str):
        """Initialize the load error.

        Args:
            path: File or directory being loaded.
            message: Failure reason.

        Examples:
            >>> err = StoreLoadError("cache.json.gz", "bad format marker")
            >>> str(err)
            'cache.json.gz: bad format marker'
            >>> err.path
            'cache.json.gz'
        """
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class InternalInvariantError(Exception):
    """Raised when an internal precondition between collaborators is broken.

    Seeing this exception means there is a bug in the scanner, not a problem
    with the scanned input.
    """
