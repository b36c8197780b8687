"""Unicode locale extension (``-u-``) handling."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

# A "u" singleton followed by one or more 2-8 character subtags, ending on a
# subtag boundary.
UNICODE_EXTENSION_RE = re.compile(r"-u(?:-[a-z0-9]{2,8})+(?![a-z0-9])", re.IGNORECASE | re.ASCII)


@dataclass(frozen=True)
class UnicodeExtension:
    """Parsed ``-u-`` sequence: leading attributes and ordered keywords."""

    attributes: Tuple[str, ...] = ()
    keywords: Dict[str, str] = field(default_factory=dict)


def _private_use_boundary(tag: str) -> int:
    pos = tag.find("-x-")
    return len(tag) if pos < 0 else pos


def find_unicode_extension(tag: str) -> Optional[Tuple[str, int]]:
    """Locate the first Unicode extension sequence outside private use.

    Returns:
        ``(sequence, index)`` where ``sequence`` starts with ``-u-`` and
        ``index`` is the character position of its leading ``-``, or None
    """
    if tag[:2].lower() == "x-":
        return None

    match = UNICODE_EXTENSION_RE.search(tag, 0, _private_use_boundary(tag))
    if match is None:
        return None
    return match.group(0), match.start()


def strip_unicode_extension(tag: str) -> str:
    """Remove the Unicode extension sequence from ``tag``.

    A pure private use tag is returned unchanged, and so is a tag without a
    ``-u-`` sequence before its private use suffix.

    Examples:
        >>> strip_unicode_extension("de-DE-u-co-phonebk")
        'de-DE'
        >>> strip_unicode_extension("en-u-ca-gregory-x-u-foo")
        'en-x-u-foo'
    """
    found = find_unicode_extension(tag)
    if found is None:
        return tag

    sequence, start = found
    return tag[:start] + tag[start + len(sequence):]


def parse_unicode_extension(extension: str) -> UnicodeExtension:
    """Split a ``-u-...`` sequence into attributes and key/value keywords.

    Each keyword is a 2-character key followed by zero or more value subtags;
    multi-subtag values are joined with ``-`` and a key without value subtags
    means ``"true"``. Only the first occurrence of a key counts.

    Examples:
        >>> parse_unicode_extension("-u-ca-islamic-civil-nu-latn").keywords
        {'ca': 'islamic-civil', 'nu': 'latn'}
        >>> parse_unicode_extension("-u-kn").keywords
        {'kn': 'true'}
    """
    subtags = [s for s in extension.lower().split("-") if s]
    if subtags and subtags[0] == "u":
        subtags = subtags[1:]

    attributes: list[str] = []
    keywords: Dict[str, str] = {}
    key: Optional[str] = None
    values: list[str] = []

    def flush() -> None:
        if key is not None and key not in keywords:
            keywords[key] = "-".join(values) if values else "true"

    for subtag in subtags:
        if len(subtag) == 2:
            flush()
            key = subtag
            values = []
        elif key is None:
            attributes.append(subtag)
        else:
            values.append(subtag)
    flush()

    return UnicodeExtension(attributes=tuple(attributes), keywords=keywords)
