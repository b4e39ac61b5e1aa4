# -*- coding: utf-8 -*-
"""Location: ./licensescan/text/text_data.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Normalized, comparable text and views over line ranges of it.

A :class:`TextData` keeps the normalized lines of a document together with a
fingerprint of the lines it currently views. Narrowed views share the line
tuple of the document they came from; only :meth:`TextData.white_out` builds a
new line tuple.

Examples:
    >>> doc = TextData("lorem ipsum\\naaaaa bbbbb\\nccccc\\nhello")
    >>> doc.lines_view()
    (0, 4)
    >>> lic = TextData("aaaaa\\nbbbbb\\nccccc")
    >>> view, score = doc.optimize_bounds(lic)
    >>> (view.lines_view(), score)
    ((1, 3), 1.0)
    >>> view.white_out().lines()
    ('lorem ipsum', '', '', 'hello')
"""

# Standard
import logging
from typing import Callable, Dict, Optional, Tuple

# First-Party
from licensescan.errors import InternalInvariantError
from licensescan.text import preproc
from licensescan.text.ngram import DEFAULT_N, NgramSet

logger = logging.getLogger(__name__)

LineRange = Tuple[int, int]


class TextData:
    """A normalized document, or a line-range view of one.

    Attributes:
        match_data (NgramSet): fingerprint of the viewed text.
        text_processed (str): the viewed text after aggressive normalization.
    """

    __slots__ = ("_lines", "_view", "match_data", "text_processed")

    def __init__(self, text: str):
        """Normalize and fingerprint a whole document.

        Args:
            text: Raw document text.
        """
        lines = tuple(preproc.normalize(text).split("\n"))
        self._init_view(lines, (0, len(lines)))

    def _init_view(self, lines: Optional[Tuple[str, ...]], view: Optional[LineRange]) -> None:
        """Populate slots for ``lines`` viewed through ``view``.

        Args:
            lines: Normalized lines of the whole document, or None for fingerprint-only data.
            view: Half-open range of lines to fingerprint.
        """
        self._lines = lines
        self._view = view
        if lines is not None and view is not None:
            self.text_processed = preproc.aggressive("\n".join(lines[view[0] : view[1]]))
            self.match_data = NgramSet.from_str(self.text_processed, DEFAULT_N)

    @classmethod
    def _from_lines(cls, lines: Tuple[str, ...], view: LineRange) -> "TextData":
        """Build a view over an existing line tuple without copying it.

        Args:
            lines: Normalized document lines.
            view: Half-open line range.

        Returns:
            TextData: The new view.
        """
        data = cls.__new__(cls)
        data._init_view(lines, view)
        return data

    @classmethod
    def from_match_data(cls, match_data: NgramSet, text_processed: str = "") -> "TextData":
        """Build fingerprint-only data, e.g. when restoring a store cache.

        Args:
            match_data: The fingerprint.
            text_processed: Processed text, if known.

        Returns:
            TextData: A value without lines; :meth:`lines_view` returns None.
        """
        data = cls.__new__(cls)
        data._init_view(None, None)
        data.match_data = match_data
        data.text_processed = text_processed
        return data

    def without_text(self) -> "TextData":
        """Drop the lines and processed text, keeping only the fingerprint.

        Returns:
            TextData: A fingerprint-only copy.

        Examples:
            >>> TextData("some text").without_text().lines_view() is None
            True
        """
        return TextData.from_match_data(self.match_data)

    def lines_view(self) -> Optional[LineRange]:
        """Get the 0-indexed, half-open line range this value views.

        Returns:
            Optional[LineRange]: ``(start, end)`` relative to the whole
            document, or None for fingerprint-only data.
        """
        return self._view

    def lines(self) -> Optional[Tuple[str, ...]]:
        """Get the normalized lines inside the current view.

        Returns:
            Optional[Tuple[str, ...]]: The viewed lines, or None for fingerprint-only data.
        """
        if self._lines is None or self._view is None:
            return None
        return self._lines[self._view[0] : self._view[1]]

    def line_count(self) -> Optional[int]:
        """Get the number of lines in the whole underlying document."""
        return None if self._lines is None else len(self._lines)

    def with_view(self, start: int, end: int) -> "TextData":
        """Narrow (or widen) the view to lines ``[start, end)`` of the whole document.

        Args:
            start: First line, inclusive.
            end: Last line, exclusive.

        Returns:
            TextData: A view sharing this document's lines.

        Raises:
            ValueError: If the range falls outside the document.
            InternalInvariantError: If this value carries no lines.
        """
        if self._lines is None:
            raise InternalInvariantError("cannot create a view of fingerprint-only text data")
        if not 0 <= start <= end <= len(self._lines):
            raise ValueError(f"view ({start}, {end}) is outside document of {len(self._lines)} lines")
        return TextData._from_lines(self._lines, (start, end))

    def match_score(self, other: "TextData") -> float:
        """Score this text against another.

        Args:
            other: Text to compare with.

        Returns:
            float: Dice coefficient of the two fingerprints, 0.0 to 1.0.
        """
        return self.match_data.dice(other.match_data)

    def eq_data(self, other: "TextData") -> bool:
        """Check whether two texts have identical fingerprints."""
        return self.match_data == other.match_data

    def optimize_bounds(self, other: "TextData") -> Tuple["TextData", float]:
        """Find the sub-view of this text that best matches ``other``.

        The end line is optimized first with the start pinned to the current
        view start, then the start line with the end pinned to the found end.

        Args:
            other: The candidate to match, typically the data of a store analysis.

        Returns:
            Tuple[TextData, float]: The narrowed view and its score. The view
            always has a determinate line range.

        Raises:
            InternalInvariantError: If this value carries no lines.
        """
        if self._lines is None or self._view is None:
            raise InternalInvariantError("cannot optimize bounds of fingerprint-only text data")

        start, end = self._view
        end_optimized, _ = self._search_optimize(
            lambda e: self.with_view(start, e).match_score(other),
            lambda e: self.with_view(start, e),
            start,
            end,
        )
        new_end = end_optimized._view[1]
        optimized, score = end_optimized._search_optimize(
            lambda s: end_optimized.with_view(s, new_end).match_score(other),
            lambda s: end_optimized.with_view(s, new_end),
            start,
            new_end,
        )
        logger.debug(f"Optimized view {self._view} to {optimized._view} with score {score:.4f}")
        return optimized, score

    @staticmethod
    def _search_optimize(score: Callable[[int], float], value: Callable[[int], "TextData"], left: int, right: int) -> Tuple["TextData", float]:
        """Ternary search for the index in ``[left, right]`` with the highest score.

        Scores are memoized since each one fingerprints a view.

        Args:
            score: Scores a candidate index.
            value: Builds the view for an index.
            left: Lowest candidate index.
            right: Highest candidate index.

        Returns:
            Tuple[TextData, float]: The view at the best index and its score.
        """
        memo: Dict[int, float] = {}

        def check(index: int) -> float:
            if index not in memo:
                memo[index] = score(index)
            return memo[index]

        while right - left > 3:
            low = (left * 2 + right) // 3
            high = (left + right * 2) // 3
            if check(low) > check(high):
                right = high - 1
            else:
                left = low + 1

        best_index, best_score = left, -1.0
        for index in range(left, right + 1):
            current = check(index)
            # later candidates win ties
            if current >= best_score:
                best_index, best_score = index, current
        return value(best_index), best_score

    def white_out(self) -> "TextData":
        """Blank out the viewed lines of the whole document.

        Returns:
            TextData: A value shaped like the whole document, with every line
            inside this view replaced by an empty line and all other lines
            kept verbatim.

        Raises:
            InternalInvariantError: If this value has no line range.
        """
        if self._lines is None or self._view is None:
            raise InternalInvariantError("white_out requires text data with a line range")
        start, end = self._view
        lines = self._lines[:start] + ("",) * (end - start) + self._lines[end:]
        return TextData._from_lines(lines, (0, len(lines)))

    def __repr__(self) -> str:
        return f"TextData(view={self._view}, grams={self.match_data.size})"
