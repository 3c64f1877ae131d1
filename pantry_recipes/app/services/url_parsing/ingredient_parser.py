"""Ingredient-line tokenizing and parsing.

A line is read left to right as::

    <numeral block> [space] <unit candidate> [space] <name candidate>

e.g. ``"1 ½ cups rice"`` -> (``"1 ½"``, ``"cups"``, ``"rice"``). Parsing never
raises: any line that cannot be segmented comes back with its text as the name.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from pantry_recipes.app.services.url_parsing.errors import AmountError, UnknownUnitError
from pantry_recipes.app.services.url_parsing.models import ParsedIngredientLine
from pantry_recipes.app.services.url_parsing.parsing_utils import (
    NumeralBlock,
    classify_unit,
    normalize_amount,
    read_numeral_block,
)

logger = logging.getLogger(__name__)

_UNIT_LETTERS = "abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True)
class IngredientTokens:
    numeral: NumeralBlock
    unit_candidate: str
    name_candidate: str
    # text from the start of the unit candidate to the end of the line
    words: str


def _skip_one_space(text: str, pos: int) -> int:
    if pos < len(text) and text[pos] == " ":
        return pos + 1
    return pos


def read_unit_candidate(text: str, pos: int) -> int:
    """Return the end offset of a lowercase word (with at most one trailing dot) at ``pos``."""
    end = pos
    while end < len(text) and text[end] in _UNIT_LETTERS:
        end += 1
    if end > pos and end < len(text) and text[end] == ".":
        end += 1
    return end


def tokenize_ingredient_line(line: str) -> Optional[IngredientTokens]:
    """Split a trimmed line into numeral, unit candidate and name candidate.

    Returns None for an empty line.
    """
    if not line:
        return None
    numeral, pos = read_numeral_block(line)
    pos = _skip_one_space(line, pos)
    word_end = read_unit_candidate(line, pos)
    unit_candidate = line[pos:word_end]
    rest = line[_skip_one_space(line, word_end):]
    return IngredientTokens(
        numeral=numeral,
        unit_candidate=unit_candidate,
        name_candidate=rest,
        words=line[pos:],
    )


def _fallback(line: str) -> ParsedIngredientLine:
    return ParsedIngredientLine(amount=None, unit=None, name=line)


def parse_ingredient_line(line: str) -> ParsedIngredientLine:
    """Parse one ingredient line into amount, unit and name.

    ``"3 pounds chicken breast"`` -> amount 3.0, unit ``"pounds"``, name
    ``"chicken breast"``. A word after the numeral that is not a known unit is
    folded back into the name (``"2 eggs"`` -> amount 2.0, name ``"eggs"``).
    """
    line = (line or "").strip()
    tokens = tokenize_ingredient_line(line)
    if tokens is None:
        return _fallback(line)

    try:
        amount: Optional[float] = normalize_amount(tokens.numeral)
    except AmountError as exc:
        if tokens.numeral.text:
            logger.debug("Ignoring amount in %r: %s", line, exc)
        amount = None

    if not tokens.unit_candidate:
        logger.debug("Failed to parse ingredient: %s", line)
        return _fallback(line)

    try:
        unit: Optional[str] = classify_unit(tokens.unit_candidate)
        name = tokens.name_candidate
    except UnknownUnitError:
        unit = None
        # the line's own text from the word onward, not a one-space join of word and rest
        name = tokens.words

    if amount is None and unit is None:
        return _fallback(line)

    parsed = ParsedIngredientLine(amount=amount, unit=unit, name=name)
    logger.debug("Parsed ingredient: %r -> %s", line, parsed)
    return parsed


def parse_ingredient_lines(lines: Iterable[str]) -> List[ParsedIngredientLine]:
    """Parse every non-blank line, keeping input order."""
    parsed = [parse_ingredient_line(line) for line in lines if line and line.strip()]
    logger.info("Parsed %d ingredient lines", len(parsed))
    return parsed


def clean_ingredient_text(text: str) -> List[str]:
    """Drop characters that are neither ASCII nor alphanumeric, then split into lines.

    Vulgar fractions such as ``½`` count as alphanumeric and are kept.
    """
    kept = "".join(c for c in text if c.isascii() or c.isalnum())
    return kept.split("\n")
