# -*- coding: utf-8 -*-
"""Location: ./licensescan/text/ngram.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Word n-gram fingerprints and the dice coefficient used to compare them.
"""

# Standard
from collections import Counter
from typing import Any, Dict

DEFAULT_N = 2


class NgramSet:
    """A multiset of word n-grams.

    Attributes:
        n (int): the number of words per gram.
        size (int): total number of grams, counting repeats.

    Examples:
        >>> a = NgramSet.from_str("a b c d", 2)
        >>> sorted(a.grams)
        ['a b', 'b c', 'c d']
        >>> a.dice(NgramSet.from_str("b c d e", 2))
        0.6666666666666666
        >>> len(NgramSet.from_str("single", 2))
        0
    """

    __slots__ = ("n", "grams", "size")

    def __init__(self, n: int = DEFAULT_N):
        """Create an empty set.

        Args:
            n: Words per gram.
        """
        self.n = n
        self.grams: Counter = Counter()
        self.size = 0

    @classmethod
    def from_str(cls, text: str, n: int = DEFAULT_N) -> "NgramSet":
        """Build a set from space separated, already processed text.

        Args:
            text: Processed text; words are split on single spaces.
            n: Words per gram.

        Returns:
            NgramSet: The populated set.
        """
        ngrams = cls(n)
        words = text.split(" ")
        for i in range(len(words) - n + 1):
            ngrams.add_gram(" ".join(words[i : i + n]))
        return ngrams

    def add_gram(self, gram: str) -> None:
        """Record one occurrence of ``gram``.

        Args:
            gram: The n-gram text.
        """
        self.grams[gram] += 1
        self.size += 1

    def get(self, gram: str) -> int:
        """Return how many times ``gram`` occurs."""
        return self.grams.get(gram, 0)

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NgramSet):
            return NotImplemented
        return self.n == other.n and self.grams == other.grams

    def dice(self, other: "NgramSet") -> float:
        """Compute the Sørensen-Dice coefficient against another set.

        Shared grams are counted with multiplicity: a gram present twice on
        one side and once on the other contributes one match.

        Args:
            other: The set to compare with.

        Returns:
            float: ``2 * matches / (len(self) + len(other))``, or 0.0 when
            either set is empty or the gram sizes differ.

        Examples:
            >>> NgramSet.from_str("x y", 2).dice(NgramSet.from_str("x y", 2))
            1.0
            >>> NgramSet.from_str("x y", 2).dice(NgramSet(2))
            0.0
        """
        if other.n != self.n:
            return 0.0
        if self.size == 0 or other.size == 0:
            return 0.0

        small, large = (self, other) if len(self.grams) <= len(other.grams) else (other, self)
        matches = 0
        for gram, count in small.grams.items():
            other_count = large.grams.get(gram)
            if other_count:
                matches += min(count, other_count)
        return (2.0 * matches) / (self.size + other.size)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the set to plain data.

        Returns:
            Dict[str, Any]: ``{"n": ..., "grams": {gram: count}}``.
        """
        return {"n": self.n, "grams": dict(self.grams)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NgramSet":
        """Rebuild a set produced by :meth:`to_dict`.

        Args:
            data: Serialized set.

        Returns:
            NgramSet: The restored set.

        Raises:
            ValueError: If a count is not a positive integer.

        Examples:
            >>> s = NgramSet.from_dict({"n": 2, "grams": {"a b": 2}})
            >>> (s.size, s.get("a b"))
            (2, 2)
        """
        ngrams = cls(int(data["n"]))
        for gram, count in data["grams"].items():
            if not isinstance(count, int) or count <= 0:
                raise ValueError(f"invalid count for gram {gram!r}: {count!r}")
            ngrams.grams[gram] = count
            ngrams.size += count
        return ngrams
