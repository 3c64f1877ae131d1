"""General parsing utilities for ingredient lines and schema.org recipe fields."""

import enum
import html
import math
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple
from urllib.parse import urlparse

from pantry_recipes.app.services.url_parsing.constants import (
    FRACTION_DIGITS,
    MEASUREMENTS,
    MISSING_STEP_TEXT,
    NUMERAL_SEPARATORS,
)
from pantry_recipes.app.services.url_parsing.errors import (
    MalformedAmountError,
    NoAmountError,
    UnknownUnitError,
)

_ASCII_DIGITS = "0123456789"

_ISO_DURATION_RE = re.compile(
    r"^P(?!$)"
    r"(?:(?P<years>\d+)Y)?"
    r"(?:(?P<months>\d+)M)?"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T(?=\d)"
    r"(?:(?P<hours>\d+)H)?"
    r"(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+(?:[.,]\d+)?)S)?"
    r")?$"
)


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


@dataclass(frozen=True)
class NumeralBlock:
    """Leading numeral of an ingredient line, e.g. ("1", " ", "½") for "1 ½"."""

    whole: str = ""
    separator: str = ""
    fraction: str = ""

    @property
    def text(self) -> str:
        return f"{self.whole}{self.separator}{self.fraction}"


def _digit_run_end(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _ASCII_DIGITS:
        pos += 1
    return pos


def read_numeral_block(text: str, pos: int = 0) -> Tuple[NumeralBlock, int]:
    """Read a numeral block starting at ``pos``; returns the block and the end offset.

    The block is a digit run, an optional separator (space, ``.`` or ``/``) and an
    optional fraction run: digits, digits ``/`` digits, or a vulgar fraction glyph.
    Every part may be empty.
    """
    whole_end = _digit_run_end(text, pos)
    whole = text[pos:whole_end]
    pos = whole_end

    separator = ""
    if pos < len(text) and text[pos] in NUMERAL_SEPARATORS:
        separator = text[pos]
        pos += 1

    fraction = ""
    if pos < len(text) and text[pos] in FRACTION_DIGITS:
        fraction = text[pos]
        pos += 1
    elif pos < len(text) and text[pos] in _ASCII_DIGITS:
        fraction_end = _digit_run_end(text, pos)
        if fraction_end < len(text) and text[fraction_end] == "/":
            fraction_end = _digit_run_end(text, fraction_end + 1)
        fraction = text[pos:fraction_end]
        pos = fraction_end

    return NumeralBlock(whole=whole, separator=separator, fraction=fraction), pos


def _divide(token: str, numerator: str, denominator: str) -> float:
    if not numerator or not denominator:
        raise MalformedAmountError(token, "fraction needs both a numerator and a denominator")
    if not all(c in _ASCII_DIGITS for c in numerator + denominator):
        raise MalformedAmountError(token, "fraction parts must be integers")
    try:
        top, bottom = int(numerator), int(denominator)
    except ValueError as exc:
        raise MalformedAmountError(token, "fraction out of range") from exc
    if bottom == 0:
        raise MalformedAmountError(token, "zero denominator")
    try:
        return top / bottom
    except OverflowError as exc:
        raise MalformedAmountError(token, "fraction out of range") from exc


def _finite(token: str, amount: float) -> float:
    if not math.isfinite(amount):
        raise MalformedAmountError(token, "amount out of range")
    return amount


def normalize_amount(block: NumeralBlock) -> float:
    """Turn a numeral block into a decimal amount.

    Raises NoAmountError for an empty block and MalformedAmountError when the
    block is present but cannot be read as a number.
    """
    token = block.text
    if not token.strip():
        raise NoAmountError()

    if block.separator == "/":
        return _divide(token, block.whole, block.fraction)

    fraction = block.fraction
    if "/" in fraction:
        # mixed number, "1 1/2"
        numerator, denominator = fraction.split("/", 1)
        part = _divide(token, numerator, denominator)
        try:
            amount = int(block.whole or "0") + part
        except (ValueError, OverflowError) as exc:
            raise MalformedAmountError(token, "whole part out of range") from exc
        return _finite(token, amount)

    if not block.whole and not fraction:
        raise MalformedAmountError(token, "separator without digits")

    digits = FRACTION_DIGITS.get(fraction, fraction) or "0"
    return _finite(token, float(f"{block.whole or '0'}.{digits}"))


def parse_numeral(token: str) -> float:
    """Normalize a standalone numeral string such as ``"1/2"`` or ``"1½"``."""
    token = (token or "").strip()
    block, end = read_numeral_block(token)
    if end != len(token):
        raise MalformedAmountError(token, "unexpected trailing characters")
    return normalize_amount(block)


def classify_unit(word: str) -> str:
    """Return ``word`` if it names a recognized measurement, else raise UnknownUnitError.

    A word matches a vocabulary entry exactly, with a trailing ``s`` or with a
    trailing ``.``. Matching is case sensitive.
    """
    for measurement in MEASUREMENTS:
        if word in (measurement, measurement + "s", measurement + "."):
            return word
    raise UnknownUnitError(word)


def extract_name(value) -> Optional[str]:
    return value if isinstance(value, str) else None


def extract_description(value) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return clean_text(html.unescape(value)) or None


def parse_iso8601_duration(duration: str) -> Optional[int]:
    """Parse an ISO-8601 duration (e.g. ``PT1H30M``, ``P1DT2H``) into whole minutes.

    Years and months are ignored. Week-based and other forms return None.
    """
    if not isinstance(duration, str):
        return None
    match = _ISO_DURATION_RE.match(duration.strip())
    if not match:
        return None
    try:
        days = int(match.group("days") or 0)
        hours = int(match.group("hours") or 0)
        minutes = int(match.group("minutes") or 0)
        seconds = int(float((match.group("seconds") or "0").replace(",", ".")))
    except (ValueError, OverflowError):
        return None
    return days * 1440 + hours * 60 + minutes + seconds // 60


def parse_servings(value) -> Optional[int]:
    """Parse servings from a recipeYield value (number, string or list of either)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        match = re.search(r"\d+", value)
        if match:
            try:
                return int(match.group())
            except ValueError:
                return None
    if isinstance(value, list):
        for item in value:
            servings = parse_servings(item)
            if servings is not None:
                return servings
    return None


class ImageKind(enum.Enum):
    URL = "url"
    OBJECT = "object"
    LIST = "list"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class ImageShape:
    """schema.org ``image`` value tagged with the shape it arrived in."""

    kind: ImageKind
    value: Any = None


def decode_image_shape(value) -> ImageShape:
    if isinstance(value, str):
        return ImageShape(ImageKind.URL, value)
    if isinstance(value, dict):
        return ImageShape(ImageKind.OBJECT, value.get("url"))
    if isinstance(value, list) and value:
        return ImageShape(ImageKind.LIST, value[0])
    return ImageShape(ImageKind.UNSUPPORTED)


def _absolute_url(value) -> Optional[str]:
    if not isinstance(value, str):
        return None
    parsed = urlparse(value.strip())
    if not parsed.scheme or not parsed.netloc:
        return None
    return value.strip()


def extract_image(value) -> Optional[str]:
    """Extract an image URL from a bare URL, an ImageObject, or a list of either."""
    shape = decode_image_shape(value)
    if shape.kind is ImageKind.LIST:
        shape = decode_image_shape(shape.value)
        if shape.kind is ImageKind.LIST:
            return None
    if shape.kind in (ImageKind.URL, ImageKind.OBJECT):
        return _absolute_url(shape.value)
    return None


def _step_text(step) -> Optional[str]:
    if isinstance(step, str):
        return html.unescape(step)
    if isinstance(step, dict) and isinstance(step.get("text"), str):
        return html.unescape(step["text"])
    return None


def extract_instructions(instructions) -> Optional[str]:
    """Render recipeInstructions as numbered lines, ``"1. Mix\\n2. Bake\\n"``."""
    if not isinstance(instructions, list):
        return None
    rendered: List[str] = []
    for number, step in enumerate(instructions, start=1):
        text = _step_text(step)
        rendered.append(f"{number}. {text if text is not None else MISSING_STEP_TEXT}\n")
    return "".join(rendered)


def extract_ingredient_lines(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
