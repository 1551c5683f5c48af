"""String helpers for permalinks and Doxygen ids.

Doxygen encodes member ids as ``<compound id>_1<hex anchor>`` and xref
section ids as ``<page id>_1_<text anchor>``.
"""

import re

_SPACES = re.compile(r" +")
_UNSAFE = re.compile(r"[^a-zA-Z0-9/-]")
_HEX_ANCHOR = re.compile(r"_1[0-9a-fg]*$")
_TEXT_ANCHOR = re.compile(r"_1_[0-9a-z]*$")
_ANCHOR_PREFIX = re.compile(r"^.*_1")
_ANONYMOUS_NAMESPACE = "anonymous_namespace{"

# Applied in order, before the catch-all replacement
_ESCAPES = (
    ("*", "2a"),
    ("&", "26"),
    ("<", "3c"),
    (">", "3e"),
    ("(", "28"),
    (")", "29"),
)


def sanitize_hierarchical_path(text: str, lowercase: bool = True) -> str:
    """Make a slash-separated name safe for use as a URL path."""
    if lowercase:
        text = text.lower()
    text = _SPACES.sub("", text)
    for character, replacement in _ESCAPES:
        text = text.replace(character, replacement)
    return _UNSAFE.sub("-", text)


def sanitize_anonymous_namespace(text: str, label: str = "anonymous") -> str:
    """``anonymous_namespace{file.cpp}`` -> ``anonymous{file.cpp}``."""
    return text.replace(_ANONYMOUS_NAMESPACE, f"{label}{{")


def flatten_path(text: str) -> str:
    return text.replace("/", "-")


def strip_permalink_hex_anchor(refid: str) -> str:
    return _HEX_ANCHOR.sub("", refid)


def strip_permalink_text_anchor(refid: str) -> str:
    return _TEXT_ANCHOR.sub("", refid)


def get_permalink_anchor(refid: str) -> str:
    return _ANCHOR_PREFIX.sub("", refid, count=1)
