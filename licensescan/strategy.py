# -*- coding: utf-8 -*-
"""Location: ./licensescan/strategy.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Scanning strategies.

A :class:`ScanStrategy` wraps a :class:`~licensescan.store.Store` with the
thresholds that decide what gets reported. It can stop at the overall match of
a document, or dig deeper to locate several licenses embedded in one file:
each pass narrows the document to the region that best matches the current
candidate, records it, blanks it out and asks the store again.

Examples:
    >>> from licensescan.store import Store
    >>> from licensescan.text import TextData
    >>> store = Store()
    >>> store.add_license("license-1", "aaaaa\\nbbbbb\\nccccc")
    >>> strategy = ScanStrategy(store).with_confidence_threshold(0.5).with_optimize(True).with_shallow_limit(1.0)
    >>> result = strategy.scan(TextData("lorem ipsum\\naaaaa bbbbb\\nccccc\\nhello"))
    >>> (result.license.name, [c.line_range for c in result.containing])
    ('license-1', [(1, 3)])
"""

# Standard
import logging
from typing import Optional

# Third-Party
from pydantic import BaseModel, ConfigDict, Field

# First-Party
from licensescan.config import get_settings, Settings
from licensescan.errors import InternalInvariantError
from licensescan.models import ContainedResult, IdentifiedLicense, ScanResult
from licensescan.store import Analysis, Store
from licensescan.text import TextData

logger = logging.getLogger(__name__)


class ScanOptions(BaseModel):
    """Thresholds and limits of a scan.

    Attributes:
        confidence_threshold: minimum score to report the overall license, and
            minimum score of every region recorded while optimizing. 1.0
            reports only exact matches, 0.0 even the weakest one.
        shallow_limit: overall score above which the scan returns right away
            without optimizing. Set it at or above ``confidence_threshold``;
            a lower value only matters once the threshold is met, so every
            reported overall match exits early.
        optimize: search for multiple licenses inside the document.
        max_passes: maximum number of regions identified per scan. 0 disables
            the optimize loop entirely.

    Examples:
        >>> opts = ScanOptions()
        >>> (opts.confidence_threshold, opts.shallow_limit, opts.optimize, opts.max_passes)
        (0.9, 0.99, False, 10)
    """

    model_config = ConfigDict(frozen=True)

    confidence_threshold: float = Field(default=0.9, ge=0.0, le=1.0)
    shallow_limit: float = Field(default=0.99, ge=0.0, le=1.0)
    optimize: bool = False
    max_passes: int = Field(default=10, ge=0)


class ScanStrategy:
    """A configured scan bound to a store.

    Strategies are immutable: every ``with_*`` method returns a new strategy
    and leaves the receiver untouched, so one strategy can be shared between
    threads and reused for any number of scans.
    """

    __slots__ = ("_store", "_options")

    def __init__(self, store: Store, options: Optional[ScanOptions] = None):
        """Bind a strategy to ``store``.

        The defaults are conservative and do not look inside documents for
        embedded licenses.

        Args:
            store: License registry to query.
            options: Scan options; defaults to :class:`ScanOptions`.
        """
        self._store = store
        self._options = options or ScanOptions()

    @classmethod
    def from_settings(cls, store: Store, settings: Optional[Settings] = None) -> "ScanStrategy":
        """Build a strategy from environment settings.

        Args:
            store: License registry to query.
            settings: Settings to read; defaults to the cached environment settings.

        Returns:
            ScanStrategy: The configured strategy.
        """
        cfg = settings or get_settings()
        return cls(
            store,
            ScanOptions(
                confidence_threshold=cfg.confidence_threshold,
                shallow_limit=cfg.shallow_limit,
                optimize=cfg.optimize,
                max_passes=cfg.max_passes,
            ),
        )

    @property
    def store(self) -> Store:
        """The store this strategy queries."""
        return self._store

    @property
    def options(self) -> ScanOptions:
        """The options in effect."""
        return self._options

    def _with(self, **changes) -> "ScanStrategy":
        """Copy this strategy with some options replaced, validating them."""
        return ScanStrategy(self._store, ScanOptions(**{**self._options.model_dump(), **changes}))

    def with_confidence_threshold(self, confidence_threshold: float) -> "ScanStrategy":
        """Return a strategy using a different confidence threshold.

        Args:
            confidence_threshold: Minimum score to report, 0.0 to 1.0.

        Returns:
            ScanStrategy: The new strategy.
        """
        return self._with(confidence_threshold=confidence_threshold)

    def with_shallow_limit(self, shallow_limit: float) -> "ScanStrategy":
        """Return a strategy using a different fast-exit limit.

        Args:
            shallow_limit: Overall score above which deeper checks are skipped.

        Returns:
            ScanStrategy: The new strategy.
        """
        return self._with(shallow_limit=shallow_limit)

    def with_optimize(self, optimize: bool) -> "ScanStrategy":
        """Return a strategy with region discovery switched on or off.

        Args:
            optimize: Whether to search for embedded licenses.

        Returns:
            ScanStrategy: The new strategy.
        """
        return self._with(optimize=optimize)

    def with_max_passes(self, max_passes: int) -> "ScanStrategy":
        """Return a strategy with a different pass limit.

        Args:
            max_passes: Maximum regions to identify per scan. Raise it above
                the number of licenses expected in a single document.

        Returns:
            ScanStrategy: The new strategy.
        """
        return self._with(max_passes=max_passes)

    def scan(self, text: TextData) -> ScanResult:
        """Scan a document using this strategy's options.

        Args:
            text: The document to scan.

        Returns:
            ScanResult: The overall score and license, plus any regions found
            while optimizing.

        Raises:
            StoreError: If the store cannot be queried, e.g. when it is empty.
            InternalInvariantError: If a narrowed view comes back without a line range.
        """
        opts = self._options
        analysis = self._store.analyze(text)
        score = analysis.score
        license: Optional[IdentifiedLicense] = None
        containing: list[ContainedResult] = []

        if score > opts.confidence_threshold:
            license = IdentifiedLicense(name=analysis.name, kind=analysis.license_type)

            if score > opts.shallow_limit:
                logger.debug(f"Matched {analysis.name} with score {score:.4f}; above shallow limit, skipping optimization")
                return ScanResult(score=score, license=license, containing=containing)

        if opts.optimize:
            containing = self._optimize(text, analysis)

        return ScanResult(score=score, license=license, containing=containing)

    def _optimize(self, text: TextData, analysis: Analysis) -> list[ContainedResult]:
        """Repeatedly narrow, record and blank out matching regions.

        Each pass attributes the region it finds to the analysis that drove
        the narrowing.

        Args:
            text: The whole document.
            analysis: Store analysis of the whole document.

        Returns:
            list[ContainedResult]: Regions found, in discovery order.

        Raises:
            InternalInvariantError: If a narrowed view has no line range.
        """
        opts = self._options
        containing: list[ContainedResult] = []
        current = text

        for n in range(opts.max_passes):
            optimized, optimized_score = current.optimize_bounds(analysis.data)
            if optimized_score < opts.confidence_threshold:
                logger.debug(f"Pass {n}: best region for {analysis.name} scored {optimized_score:.4f}, stopping")
                break

            line_range = optimized.lines_view()
            if line_range is None:
                raise InternalInvariantError("optimize_bounds returned a view without a line range")
            if line_range[0] >= line_range[1]:
                # nothing left to narrow to
                logger.debug(f"Pass {n}: best region for {analysis.name} is empty, stopping")
                break

            containing.append(
                ContainedResult(
                    score=optimized_score,
                    license=IdentifiedLicense(name=analysis.name, kind=analysis.license_type),
                    line_range=line_range,
                )
            )
            logger.debug(f"Pass {n}: found {analysis.name} at lines {line_range} with score {optimized_score:.4f}")

            current = optimized.white_out()
            analysis = self._store.analyze(current)
        else:
            if opts.max_passes:
                logger.debug(f"Reached max_passes={opts.max_passes} with {len(containing)} regions found")

        return containing
