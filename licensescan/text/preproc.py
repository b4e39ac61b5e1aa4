# -*- coding: utf-8 -*-
"""Location: ./licensescan/text/preproc.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Text normalization passes.

Two pipelines are applied to every text before fingerprinting:

* :func:`normalize` runs once when a document is loaded. It cleans up encoding
  noise but never adds or removes lines, so line numbers keep pointing at the
  original document.
* :func:`aggressive` runs on the text of each view right before it is turned
  into n-grams. It strips everything that should not influence a match, such
  as punctuation, letter case, comment markers and copyright lines.

Examples:
    >>> normalize("Hello\\r\\n\\u201cWorld\\u201d\\t\\tok")
    'Hello\\n"World" ok'
    >>> aggressive("// Permission is granted,\\n// free of charge.")
    'permission is granted free of charge'
"""

# Standard
from collections import Counter
import re
from typing import Callable, Sequence
import unicodedata

PreprocFn = Callable[[str], str]

_URL_RE = re.compile(r"https?://\S+")
_URL_PLACEHOLDER = "http://blackboxed/url"
# keep word chars, whitespace and printable ASCII punctuation
_JUNK_RE = re.compile(r"[^\w\s!-/:-@\[-`{-~©]")
_HSPACE_RE = re.compile(r"[^\S\n]+")
_PUNCT_MAP = str.maketrans(
    {
        "‘": "'",
        "’": "'",
        "‚": "'",
        "‛": "'",
        "“": '"',
        "”": '"',
        "„": '"',
        "‟": '"',
        "‐": "-",
        "‑": "-",
        "‒": "-",
        "–": "-",
        "—": "-",
        "―": "-",
        "−": "-",
        "…": "...",
    }
)
_COMMENT_PREFIX_RE = re.compile(r"^\s*(\S{1,3})(?:\s+|$)")
_VSPACE_RE = re.compile(r"\n{3,}")
_NON_WORD_RE = re.compile(r"[^\w\s]+")
_TITLE_RE = re.compile(r"^.*\blicen[cs]e( version \S+)?( copyright.*)?\n\n")
_COPYRIGHT_RE = re.compile(r"^[ \t]*copyright[ \t]+(?:c\b|\d).*$", re.MULTILINE)
_WHITESPACE_RE = re.compile(r"\s+")

# share of non-blank lines that must carry the same prefix for it to be stripped
COMMON_PREFIX_RATIO = 0.8
COMMON_PREFIX_MIN_LINES = 3


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF.

    Args:
        text: Input text.

    Returns:
        str: Text using only ``\\n`` line breaks.
    """
    return text.replace("\r\n", "\n").replace("\r", "\n")


def normalize_unicode(text: str) -> str:
    """Apply NFC normalization.

    Args:
        text: Input text.

    Returns:
        str: The NFC normalized text.
    """
    return unicodedata.normalize("NFC", text)


def remove_junk(text: str) -> str:
    """Drop characters that are neither words, whitespace nor punctuation.

    Args:
        text: Input text.

    Returns:
        str: Text without control characters and symbols.

    Examples:
        >>> remove_junk("a\\u0007b \\u2605 c")
        'ab  c'
    """
    return _JUNK_RE.sub("", text)


def blackbox_urls(text: str) -> str:
    """Replace URLs with a fixed placeholder so differing links still match.

    Args:
        text: Input text.

    Returns:
        str: Text with every http(s) URL replaced.

    Examples:
        >>> blackbox_urls("see https://opensource.org/licenses/MIT for details")
        'see http://blackboxed/url for details'
    """
    return _URL_RE.sub(_URL_PLACEHOLDER, text)


def normalize_horizontal_whitespace(text: str) -> str:
    """Collapse runs of spaces and tabs to a single space, leaving newlines alone."""
    return _HSPACE_RE.sub(" ", text)


def normalize_punctuation(text: str) -> str:
    """Map typographic quotes, dashes and ellipses to their ASCII forms."""
    return text.translate(_PUNCT_MAP)


def trim_lines(text: str) -> str:
    """Strip leading and trailing whitespace from every line."""
    return "\n".join(line.strip() for line in text.split("\n"))


def remove_common_tokens(text: str) -> str:
    """Strip a comment token shared by most non-blank lines.

    Source headers usually arrive wrapped in comment markers (``#``, ``//``,
    ``*``, ``dnl``, ``REM``). When a text has at least
    :data:`COMMON_PREFIX_MIN_LINES` non-blank lines and at least
    :data:`COMMON_PREFIX_RATIO` of them start with the same short token, that
    token is removed from every line carrying it.

    Args:
        text: Input text.

    Returns:
        str: Text with the common prefix removed.

    Examples:
        >>> remove_common_tokens("# one\\n# two\\n\\n# three")
        'one\\ntwo\\n\\nthree'
        >>> remove_common_tokens("REM one\\nREM two\\nREM three")
        'one\\ntwo\\nthree'
        >>> remove_common_tokens("plain\\ntext")
        'plain\\ntext'
    """
    lines = text.split("\n")
    prefixes: Counter = Counter()
    non_blank = 0
    for line in lines:
        if not line.strip():
            continue
        non_blank += 1
        match = _COMMENT_PREFIX_RE.match(line)
        if match:
            prefixes[match.group(1)] += 1

    if non_blank < COMMON_PREFIX_MIN_LINES or not prefixes:
        return text

    prefix, count = prefixes.most_common(1)[0]
    if count < non_blank * COMMON_PREFIX_RATIO:
        return text

    stripped = []
    for line in lines:
        match = _COMMENT_PREFIX_RE.match(line)
        if match and match.group(1) == prefix:
            line = line[match.end() :]
        stripped.append(line)
    return "\n".join(stripped)


def normalize_vertical_whitespace(text: str) -> str:
    """Collapse three or more consecutive newlines into one paragraph break."""
    return _VSPACE_RE.sub("\n\n", text)


def remove_punctuation(text: str) -> str:
    """Remove all punctuation.

    Examples:
        >>> remove_punctuation("don't (c) stop-gap.")
        'dont c stopgap'
    """
    return _NON_WORD_RE.sub("", text)


def lowercaseify(text: str) -> str:
    """Lowercase the text."""
    return text.lower()


def remove_title_line(text: str) -> str:
    """Drop a leading "... license [version x]" title paragraph.

    Examples:
        >>> remove_title_line("the mit license\\n\\npermission is hereby granted")
        'permission is hereby granted'
    """
    return _TITLE_RE.sub("", text, count=1)


def remove_copyright_statements(text: str) -> str:
    """Drop lines that are copyright statements.

    Only lines starting with ``copyright`` followed by a year or a ``c``
    marker are removed; wrapped sentences such as "copyright notice and this
    permission notice" are kept.

    Examples:
        >>> remove_copyright_statements("copyright c 2018 someone\\ncopyright notice stays")
        '\\ncopyright notice stays'
    """
    return _COPYRIGHT_RE.sub("", text)


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run, including newlines, into one space."""
    return _WHITESPACE_RE.sub(" ", text)


def trim(text: str) -> str:
    """Strip surrounding whitespace."""
    return text.strip()


PREPROC_NORMALIZE: Sequence[PreprocFn] = (
    normalize_line_endings,
    normalize_unicode,
    normalize_punctuation,
    remove_junk,
    blackbox_urls,
    normalize_horizontal_whitespace,
    trim_lines,
)

PREPROC_AGGRESSIVE: Sequence[PreprocFn] = (
    remove_common_tokens,
    normalize_vertical_whitespace,
    remove_punctuation,
    lowercaseify,
    remove_title_line,
    remove_copyright_statements,
    collapse_whitespace,
    trim,
)


def apply(text: str, passes: Sequence[PreprocFn]) -> str:
    """Run ``text`` through each pass in order.

    Args:
        text: Input text.
        passes: Normalization functions.

    Returns:
        str: The transformed text.
    """
    for fn in passes:
        text = fn(text)
    return text


def normalize(text: str) -> str:
    """Apply the line-preserving normalization pipeline."""
    return apply(text, PREPROC_NORMALIZE)


def aggressive(text: str) -> str:
    """Apply the match-oriented normalization pipeline."""
    return apply(text, PREPROC_AGGRESSIVE)
