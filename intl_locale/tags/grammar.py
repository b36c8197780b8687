"""BCP 47 language tag grammar (RFC 5646 section 2.1).

The regular expressions are composed from the collected ABNF of RFC 5646 and
compiled once. Language tags are case insensitive (RFC 5646 section 2.1.1).
"""

from __future__ import annotations

import re
from typing import Iterable

from .types import TagParts, ValidationError


# RFC 5234 section B.1
ALPHA = "[a-z]"
DIGIT = "[0-9]"

# alphanum      = (ALPHA / DIGIT)
alphanum = "[a-z0-9]"

# irregular     = "en-GB-oed" / "i-ami" / ... / "sgn-CH-DE"
IRREGULAR_TAGS = (
    "en-GB-oed",
    "i-ami",
    "i-bnn",
    "i-default",
    "i-enochian",
    "i-hak",
    "i-klingon",
    "i-lux",
    "i-mingo",
    "i-navajo",
    "i-pwn",
    "i-tao",
    "i-tay",
    "i-tsu",
    "sgn-BE-FR",
    "sgn-BE-NL",
    "sgn-CH-DE",
)

# regular       = "art-lojban" / "cel-gaulish" / ... / "zh-xiang"
REGULAR_TAGS = (
    "art-lojban",
    "cel-gaulish",
    "no-bok",
    "no-nyn",
    "zh-guoyu",
    "zh-hakka",
    "zh-min",
    "zh-min-nan",
    "zh-xiang",
)


def _alternation(tags: Iterable[str]) -> str:
    # Longest first so "zh-min-nan" is tried before "zh-min".
    ordered = sorted(tags, key=len, reverse=True)
    return "(?:" + "|".join(re.escape(tag) for tag in ordered) + ")"


# grandfathered = irregular / regular
grandfathered = "(?:" + _alternation(IRREGULAR_TAGS) + "|" + _alternation(REGULAR_TAGS) + ")"

# privateuse    = "x" 1*("-" (1*8alphanum))
privateuse = f"(?:x(?:-{alphanum}{{1,8}})+)"

# singleton     = DIGIT / %x41-57 / %x59-5A / %x61-77 / %x79-7A
singleton = f"(?:{DIGIT}|[a-wy-z])"

# extension     = singleton 1*("-" (2*8alphanum))
extension = f"(?:{singleton}(?:-{alphanum}{{2,8}})+)"

# variant       = 5*8alphanum / (DIGIT 3alphanum)
variant = f"(?:{alphanum}{{5,8}}|{DIGIT}{alphanum}{{3}})"

# region        = 2ALPHA / 3DIGIT
region = f"(?:{ALPHA}{{2}}|{DIGIT}{{3}})"

# script        = 4ALPHA
script = f"(?:{ALPHA}{{4}})"

# extlang       = 3ALPHA *2("-" 3ALPHA)
extlang = f"(?:{ALPHA}{{3}}(?:-{ALPHA}{{3}}){{0,2}})"

# language      = 2*3ALPHA ["-" extlang] / 4ALPHA / 5*8ALPHA
language = f"(?:{ALPHA}{{2,3}}(?:-{extlang})?|{ALPHA}{{4}}|{ALPHA}{{5,8}})"

# langtag       = language ["-" script] ["-" region] *("-" variant)
#                 *("-" extension) ["-" privateuse]
langtag = (
    f"{language}(?:-{script})?(?:-{region})?(?:-{variant})*"
    f"(?:-{extension})*(?:-{privateuse})?"
)

# Language-Tag  = langtag / privateuse / grandfathered
Language_Tag = f"(?:{langtag}|{privateuse}|{grandfathered})"

_FLAGS = re.IGNORECASE | re.ASCII

LANGUAGE_TAG_RE = re.compile(Language_Tag, _FLAGS)
GRANDFATHERED_RE = re.compile(grandfathered, _FLAGS)
VARIANT_RE = re.compile(variant, _FLAGS)
SCRIPT_RE = re.compile(script, _FLAGS)
REGION_RE = re.compile(region, _FLAGS)
EXTLANG_RE = re.compile(f"{ALPHA}{{3}}", _FLAGS)


def _has_duplicate_subtags(subtags: list[str]) -> bool:
    """Check lower-cased subtags (private use already removed) for repeats.

    The first subtag is the language, or the "i" of an irregular tag, and is
    never a variant or an extension singleton.
    """
    variants: set[str] = set()
    singletons: set[str] = set()
    in_extensions = False

    for subtag in subtags[1:]:
        if len(subtag) == 1:
            if subtag in singletons:
                return True
            singletons.add(subtag)
            in_extensions = True
        elif not in_extensions and VARIANT_RE.fullmatch(subtag):
            if subtag in variants:
                return True
            variants.add(subtag)

    return False


def is_structurally_valid(tag: str) -> bool:
    """Verify that ``tag`` is a well-formed BCP 47 language tag.

    Well-formed means the whole string matches the RFC 5646 ``Language-Tag``
    production and, outside any private use suffix, no variant and no
    extension singleton appears twice.

    Never raises; callers decide whether to reject.

    Examples:
        >>> is_structurally_valid("zh-Hans-CN")
        True
        >>> is_structurally_valid("en-fonipa-fonipa")
        False
        >>> is_structurally_valid("x-whatever")
        True
    """
    if not isinstance(tag, str):
        return False
    if LANGUAGE_TAG_RE.fullmatch(tag) is None:
        return False

    lowered = tag.lower()

    # Private use content is caller-defined and never checked for duplicates.
    if lowered.startswith("x-"):
        return True
    pos = lowered.find("-x-")
    if pos != -1:
        lowered = lowered[:pos]

    return not _has_duplicate_subtags(lowered.split("-"))


def parse_tag(tag: str) -> TagParts:
    """Decompose a structurally valid tag into its components.

    Subtags keep the casing they were given; canonicalize first for
    canonical components.

    Raises:
        ValidationError: If ``tag`` is not structurally valid
    """
    if not is_structurally_valid(tag):
        raise ValidationError(tag)

    if tag[:2].lower() == "x-":
        return TagParts(private_use=tag)
    if GRANDFATHERED_RE.fullmatch(tag):
        return TagParts(language=tag, legacy=True)

    subtags = tag.split("-")
    count = len(subtags)
    i = 1
    language = subtags[0]

    extlangs: list[str] = []
    if len(language) <= 3:
        while i < count and len(extlangs) < 3 and EXTLANG_RE.fullmatch(subtags[i]):
            extlangs.append(subtags[i])
            i += 1

    script = None
    if i < count and SCRIPT_RE.fullmatch(subtags[i]):
        script = subtags[i]
        i += 1

    region = None
    if i < count and REGION_RE.fullmatch(subtags[i]):
        region = subtags[i]
        i += 1

    variants: list[str] = []
    while i < count and VARIANT_RE.fullmatch(subtags[i]):
        variants.append(subtags[i])
        i += 1

    extensions: list[str] = []
    while i < count and subtags[i].lower() != "x":
        start = i
        i += 1
        while i < count and len(subtags[i]) > 1:
            i += 1
        extensions.append("-".join(subtags[start:i]))

    private_use = "-".join(subtags[i:]) if i < count else None

    return TagParts(
        language=language,
        extlangs=tuple(extlangs),
        script=script,
        region=region,
        variants=tuple(variants),
        extensions=tuple(extensions),
        private_use=private_use,
    )


def truncate_tag(tag: str) -> str:
    """Drop the rightmost subtag, and a singleton it would leave dangling.

    Returns an empty string once nothing is left (RFC 4647 lookup fallback).

    Examples:
        >>> truncate_tag("zh-Hant-TW")
        'zh-Hant'
        >>> truncate_tag("de-DE-a-foo")
        'de-DE'
    """
    pos = tag.rfind("-")
    if pos < 0:
        return ""
    if pos >= 2 and tag[pos - 2] == "-":
        pos -= 2
    return tag[:pos]
