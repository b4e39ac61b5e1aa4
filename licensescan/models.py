# -*- coding: utf-8 -*-
"""Location: ./licensescan/models.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Pydantic models describing scan results.

These are the value objects returned by ``ScanStrategy.scan``. They are frozen
once built and serialize to the stable JSON shape consumed by reporting tools:

    {"score": 0.97,
     "license": {"name": "MIT", "kind": "text"},
     "containing": [{"score": 0.95, "license": {...}, "line_range": [3, 24]}]}
"""

# Standard
from enum import Enum
from typing import Any, Optional

# Third-Party
import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LicenseType(str, Enum):
    """Classification of a registered license text.

    Attributes:
        TEXT: the canonical full text of the license.
        HEADER: the short notice placed at the top of source files.
        ALTERNATE: an alternate wording of the same license.

    Examples:
        >>> LicenseType.TEXT.value
        'text'
        >>> LicenseType("header")
        <LicenseType.HEADER: 'header'>
    """

    TEXT = "text"
    HEADER = "header"
    ALTERNATE = "alternate"


class IdentifiedLicense(BaseModel):
    """A license that was identified, along with the kind of text matched.

    Examples:
        >>> lic = IdentifiedLicense(name="MIT", kind=LicenseType.TEXT)
        >>> lic.model_dump(mode="json")
        {'name': 'MIT', 'kind': 'text'}
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: LicenseType


class ContainedResult(BaseModel):
    """A single license identified within a larger text.

    Attributes:
        score: confidence of the match within ``line_range``, 0.0 to 1.0.
        license: the license identified in this portion of the text.
        line_range: 0-indexed ``(start, end)`` lines, end exclusive, relative
            to the whole scanned document.

    Examples:
        >>> c = ContainedResult(score=0.8, license=IdentifiedLicense(name="MIT", kind="text"), line_range=(2, 5))
        >>> c.line_range
        (2, 5)
    """

    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=1.0)
    license: IdentifiedLicense
    line_range: tuple[int, int]

    @field_validator("line_range")
    @classmethod
    def validate_line_range(cls, value: tuple[int, int]) -> tuple[int, int]:
        """Require a non-empty range starting at or after line 0.

        Args:
            value: The ``(start, end)`` pair.

        Returns:
            tuple[int, int]: The validated range.

        Raises:
            ValueError: If the range is empty, inverted or negative.
        """
        start, end = value
        if start < 0 or start >= end:
            raise ValueError(f"line_range must satisfy 0 <= start < end, got {value}")
        return value


class ScanResult(BaseModel):
    """Information about scanned content, produced by ``ScanStrategy.scan``.

    Attributes:
        score: confidence of the overall match, 0.0 to 1.0.
        license: the license of the overall text, or None if nothing met the
            confidence threshold.
        containing: licenses discovered inside the text when optimization
            was enabled.
    """

    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=1.0)
    license: Optional[IdentifiedLicense] = None
    containing: list[ContainedResult] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Render the result as plain JSON-compatible data.

        Returns:
            dict[str, Any]: The result with enums as strings and line ranges as lists.

        Examples:
            >>> ScanResult(score=0.25).to_dict()
            {'score': 0.25, 'license': None, 'containing': []}
            >>> r = ScanResult(score=0.5, containing=[ContainedResult(score=0.9, license=IdentifiedLicense(name="MIT", kind="header"), line_range=(0, 3))])
            >>> r.to_dict()["containing"][0]
            {'score': 0.9, 'license': {'name': 'MIT', 'kind': 'header'}, 'line_range': [0, 3]}
        """
        return self.model_dump(mode="json")

    def to_json(self) -> bytes:
        """Serialize the result with orjson.

        Returns:
            bytes: UTF-8 encoded JSON.

        Examples:
            >>> ScanResult(score=0.0).to_json()
            b'{"score":0.0,"license":null,"containing":[]}'
        """
        return orjson.dumps(self.to_dict())
