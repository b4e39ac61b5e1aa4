# -*- coding: utf-8 -*-
"""Location: ./licensescan/store.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

License Store.

This module implements the registry of known license texts that documents are
matched against. Each license has a canonical text plus optional header and
alternate variants; :meth:`Store.analyze` returns the single best-scoring
entry for a document.

The registry is not locked. Populate it before scanning and do not mutate it
while any scan is running; concurrent read-only :meth:`Store.analyze` calls
are safe.

Examples:
    >>> store = Store()
    >>> store.add_license("license-1", "aaaaa\\nbbbbb\\nccccc")
    >>> store.add_license("license-2", "1234 5678 1234\\n0000\\n1010101010\\n\\n8888 9999")
    >>> analysis = store.analyze(TextData("aaaaa bbbbb ccccc"))
    >>> (analysis.name, analysis.score, analysis.license_type.value)
    ('license-1', 1.0, 'text')
"""

# Standard
from dataclasses import dataclass, field
import gzip
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# Third-Party
import orjson

# First-Party
from licensescan.errors import EmptyStoreError, StoreError, StoreLoadError
from licensescan.models import LicenseType
from licensescan.text import NgramSet, TextData

logger = logging.getLogger(__name__)

CACHE_FORMAT = "licensescan-store-1"

TextLike = Union[TextData, str]


@dataclass(frozen=True)
class Analysis:
    """Best match of a text against the registry.

    Attributes:
        score: similarity of the best match, 0.0 to 1.0.
        name: name of the matched license.
        license_type: which text of the license matched.
        data: the matched registry text, usable to narrow a view with
            ``TextData.optimize_bounds``.
    """

    score: float
    name: str
    license_type: LicenseType
    data: TextData = field(repr=False, compare=False)


@dataclass
class LicenseEntry:
    """All registered texts of one license."""

    original: TextData
    aliases: List[str] = field(default_factory=list)
    headers: List[TextData] = field(default_factory=list)
    alternates: List[TextData] = field(default_factory=list)

    def candidates(self) -> List[tuple[LicenseType, TextData]]:
        """List every text of this license in match order.

        Returns:
            List[tuple[LicenseType, TextData]]: Original first, then alternates, then headers.
        """
        found = [(LicenseType.TEXT, self.original)]
        found.extend((LicenseType.ALTERNATE, alt) for alt in self.alternates)
        found.extend((LicenseType.HEADER, header) for header in self.headers)
        return found


def _as_text_data(data: TextLike) -> TextData:
    """Accept raw strings wherever text data is expected."""
    return data if isinstance(data, TextData) else TextData(data)


class Store:
    """Registry of named license fingerprints.

    Examples:
        >>> store = Store()
        >>> store.is_empty()
        True
        >>> store.add_license("MIT", "Permission is hereby granted, free of charge")
        >>> ("MIT" in store, len(store), store.licenses())
        (True, 1, ['MIT'])
    """

    def __init__(self) -> None:
        """Create an empty store."""
        self._licenses: Dict[str, LicenseEntry] = {}

    def __len__(self) -> int:
        """Count registered licenses.

        Returns:
            int: Number of license names in the store.
        """
        return len(self._licenses)

    def __contains__(self, name: object) -> bool:
        """Check whether a license name is registered.

        Args:
            name: License name to look up.

        Returns:
            bool: True if ``name`` is registered.
        """
        return name in self._licenses

    def is_empty(self) -> bool:
        """Check whether the store has no licenses.

        Returns:
            bool: True if no license is registered.
        """
        return not self._licenses

    def licenses(self) -> List[str]:
        """Get the registered license names.

        Returns:
            List[str]: Names in sorted order.
        """
        return sorted(self._licenses)

    def get_original(self, name: str) -> Optional[TextData]:
        """Get the canonical text of a license.

        Args:
            name: License name.

        Returns:
            Optional[TextData]: The registered text, or None if unknown.
        """
        entry = self._licenses.get(name)
        return entry.original if entry else None

    def add_license(self, name: str, data: TextLike) -> None:
        """Register a license, replacing any previous entry with that name.

        Args:
            name: License identifier, e.g. an SPDX id.
            data: The canonical license text.
        """
        self._licenses[name] = LicenseEntry(original=_as_text_data(data))
        logger.debug(f"Registered license {name}")

    def add_variant(self, name: str, variant: LicenseType, data: TextLike) -> None:
        """Attach a header or alternate text to a registered license.

        Args:
            name: License identifier.
            variant: ``LicenseType.HEADER`` or ``LicenseType.ALTERNATE``.
            data: The variant text.

        Raises:
            StoreError: If ``name`` is not registered.
            ValueError: If ``variant`` is ``LicenseType.TEXT``.
        """
        entry = self._licenses.get(name)
        if entry is None:
            raise StoreError(f"license {name!r} is not registered")
        text = _as_text_data(data)
        if variant == LicenseType.HEADER:
            entry.headers.append(text)
        elif variant == LicenseType.ALTERNATE:
            entry.alternates.append(text)
        else:
            raise ValueError("use add_license to set the canonical text of a license")

    def set_aliases(self, name: str, aliases: List[str]) -> None:
        """Record alternative identifiers for a license.

        Args:
            name: License identifier.
            aliases: Other names the license is known by.

        Raises:
            StoreError: If ``name`` is not registered.
        """
        entry = self._licenses.get(name)
        if entry is None:
            raise StoreError(f"license {name!r} is not registered")
        entry.aliases = list(aliases)

    def aliases(self, name: str) -> List[str]:
        """Get the aliases of a license, empty if unknown."""
        entry = self._licenses.get(name)
        return list(entry.aliases) if entry else []

    def analyze(self, text: TextData) -> Analysis:
        """Find the registered license text that best matches ``text``.

        Every text of every license is scored. Licenses are visited in name
        order and only a strictly better score replaces the current best, so
        identical inputs always produce the same analysis.

        Args:
            text: Document or view to match.

        Returns:
            Analysis: The best match.

        Raises:
            EmptyStoreError: If no license is registered.
        """
        if not self._licenses:
            raise EmptyStoreError()

        best: Optional[Analysis] = None
        for name in sorted(self._licenses):
            for license_type, candidate in self._licenses[name].candidates():
                score = text.match_score(candidate)
                if best is None or score > best.score:
                    best = Analysis(score=score, name=name, license_type=license_type, data=candidate)

        logger.debug(f"Best match {best.name} ({best.license_type.value}) with score {best.score:.4f}")
        return best

    @classmethod
    def load_spdx(cls, directory: Union[str, Path], include_texts: bool = False) -> "Store":
        """Build a store from the SPDX license-list-data JSON layout.

        Reads every ``*.json`` file in ``directory`` (``json/details`` in the
        SPDX repository). Deprecated identifiers are skipped. A non-empty
        ``standardLicenseHeader`` is registered as a header variant.

        Args:
            directory: Directory holding one JSON document per license.
            include_texts: Keep the normalized texts; otherwise only fingerprints are kept.

        Returns:
            Store: The populated store.

        Raises:
            StoreLoadError: If the directory or a license file cannot be read.
        """
        path = Path(directory)
        if not path.is_dir():
            raise StoreLoadError(str(path), "not a directory")

        store = cls()
        skipped = 0
        for license_file in sorted(path.glob("*.json")):
            try:
                details = orjson.loads(license_file.read_bytes())
            except (OSError, orjson.JSONDecodeError) as e:
                raise StoreLoadError(str(license_file), str(e)) from e

            if details.get("isDeprecatedLicenseId", False):
                skipped += 1
                continue
            name = details.get("licenseId")
            text = details.get("licenseText")
            if not name or not text:
                raise StoreLoadError(str(license_file), "missing licenseId or licenseText")

            original = TextData(text)
            store.add_license(name, original if include_texts else original.without_text())
            header = (details.get("standardLicenseHeader") or "").strip()
            if header:
                header_data = TextData(header)
                store.add_variant(name, LicenseType.HEADER, header_data if include_texts else header_data.without_text())

        logger.info(f"Loaded {len(store)} licenses from {path} ({skipped} deprecated skipped)")
        return store

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the fingerprints of every license.

        Returns:
            Dict[str, Any]: Plain data accepted by :meth:`from_dict`.
        """
        return {
            "format": CACHE_FORMAT,
            "licenses": {
                name: {
                    "original": entry.original.match_data.to_dict(),
                    "aliases": entry.aliases,
                    "headers": [h.match_data.to_dict() for h in entry.headers],
                    "alternates": [a.match_data.to_dict() for a in entry.alternates],
                }
                for name, entry in sorted(self._licenses.items())
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Store":
        """Rebuild a store serialized with :meth:`to_dict`.

        Args:
            data: Serialized store.

        Returns:
            Store: A store holding fingerprint-only texts.

        Raises:
            ValueError: If the format marker or structure is wrong.
        """
        if data.get("format") != CACHE_FORMAT:
            raise ValueError(f"unsupported cache format {data.get('format')!r}")

        store = cls()
        for name, entry in data["licenses"].items():
            store._licenses[name] = LicenseEntry(
                original=TextData.from_match_data(NgramSet.from_dict(entry["original"])),
                aliases=list(entry.get("aliases", [])),
                headers=[TextData.from_match_data(NgramSet.from_dict(h)) for h in entry.get("headers", [])],
                alternates=[TextData.from_match_data(NgramSet.from_dict(a)) for a in entry.get("alternates", [])],
            )
        return store

    def to_cache(self, path: Union[str, Path]) -> None:
        """Write the store to a gzip-compressed JSON cache file.

        Args:
            path: Destination file.
        """
        payload = gzip.compress(orjson.dumps(self.to_dict()))
        Path(path).write_bytes(payload)
        logger.info(f"Wrote {len(self)} licenses to cache {path}")

    @classmethod
    def from_cache(cls, path: Union[str, Path]) -> "Store":
        """Load a store written by :meth:`to_cache`.

        Args:
            path: Cache file.

        Returns:
            Store: The restored store.

        Raises:
            StoreLoadError: If the file is missing, corrupt or of another format.
        """
        try:
            data = orjson.loads(gzip.decompress(Path(path).read_bytes()))
            store = cls.from_dict(data)
        except (OSError, EOFError, orjson.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise StoreLoadError(str(path), str(e)) from e
        logger.info(f"Loaded {len(store)} licenses from cache {path}")
        return store
