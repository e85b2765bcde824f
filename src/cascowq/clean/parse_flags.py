"""Parse numeric text cells that carry inline qualifier codes.

Source extracts store each measured channel as text so that a value can
travel with its qualifiers, e.g. "U<0.02", "JB0.15", ">4.5" or "1.2E-3".
This module turns one such cell into a float plus two booleans.

Rules:
- Never raise on a bad cell; return a missing value and say why
- A cell holding two comma-separated numbers is ambiguous and is dropped
- Which codes mean censored / flagged comes from the channel's QualifierRule
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Literal

import numpy as np
import pandas as pd

from cascowq.schemas.qualifiers import MODIFIER_CHARS, QUALIFIER_CHARS, QualifierRule

ParseStatus = Literal["ok", "missing", "ambiguous", "unparseable"]

# Qualifiers on either side of a decimal number, possibly space separated.
# "E" is not a qualifier character, so it can only be read as an exponent.
_CODES = "[" + re.escape("".join(sorted(QUALIFIER_CHARS))) + r"\s]*"
_CELL_RE = re.compile(
    rf"""^
    (?P<prefix>{_CODES})
    (?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:E[-+]?\d+)?)
    (?P<suffix>{_CODES})
    $""",
    re.VERBOSE,
)
_SPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ParsedValue:
    """Result of parsing a single cell.

    Attributes:
        value: Parsed number, NaN when missing or unparseable
        censored: Value is a detection or quantitation limit
        flagged: Source marked the value as uncertain
        status: "ok", "missing", "ambiguous" or "unparseable"
        codes: Qualifier characters found in the cell, in order
    """

    value: float
    censored: bool = False
    flagged: bool = False
    status: ParseStatus = "ok"
    codes: str = ""


@dataclass
class ParseSummary:
    """Counts collected while parsing one channel."""

    channel: str
    total: int = 0
    missing: int = 0
    ambiguous: int = 0
    unparseable: int = 0
    censored: int = 0
    flagged: int = 0
    unknown_codes: Counter = field(default_factory=Counter)

    @property
    def dropped(self) -> int:
        """Cells that had content but produced no value."""
        return self.ambiguous + self.unparseable


def _missing(status: ParseStatus) -> ParsedValue:
    return ParsedValue(value=np.nan, status=status)


def split_qualifier(text: str) -> tuple[str, str] | None:
    """Split a cell into (qualifier codes, numeric text).

    Codes found before and after the number are concatenated in reading
    order. Returns None when the text is not a single qualified number.

    >>> split_qualifier("U<0.02")
    ('U<', '0.02')
    >>> split_qualifier("1.5E-3")
    ('', '1.5E-3')
    >>> split_qualifier("J B0.1")
    ('JB', '0.1')
    """
    match = _CELL_RE.match(text.strip().upper())
    if match is None:
        return None
    codes = _SPACE_RE.sub("", match["prefix"] + match["suffix"])
    return codes, match["number"]


def parse_cell(raw: Any, rule: QualifierRule) -> ParsedValue:
    """Parse one raw cell under a channel's qualifier rule.

    Args:
        raw: Cell content (str, number, None or NaN)
        rule: Qualifier rule of the channel the cell belongs to

    Returns:
        ParsedValue with the number, censored and flagged booleans, and a
        status explaining any missing value
    """
    if not isinstance(raw, str):
        if raw is None or pd.isna(raw):
            return _missing("missing")
        if isinstance(raw, (int, float, np.integer, np.floating)) and not isinstance(raw, bool):
            return ParsedValue(value=float(raw))

    text = str(raw).strip()
    if not text or text.upper() in ("NA", "NAN"):
        return _missing("missing")

    # Two readings in one cell; origin unknown, so neither is trusted
    if "," in text:
        return _missing("ambiguous")

    parts = split_qualifier(text)
    if parts is None:
        return _missing("unparseable")

    codes, number = parts
    censored, flagged = rule.resolve(codes) if codes else (False, False)
    return ParsedValue(
        value=float(number),
        censored=censored,
        flagged=flagged,
        codes=codes,
    )


def parse_channel(
    series: pd.Series,
    rule: QualifierRule,
    channel: str | None = None,
) -> tuple[pd.DataFrame, ParseSummary]:
    """Parse a whole column of raw cells.

    Args:
        series: Raw column for one channel
        rule: Qualifier rule for that channel
        channel: Name used for the output columns (defaults to series.name)

    Returns:
        Tuple of:
        - DataFrame indexed like series with columns <channel>,
          <channel>_cens and <channel>_flag
        - ParseSummary with counts for the audit trail
    """
    channel = channel or str(series.name)
    parsed = [parse_cell(raw, rule) for raw in series]

    out = pd.DataFrame(
        {
            channel: pd.Series([p.value for p in parsed], index=series.index, dtype="float64"),
            f"{channel}_cens": pd.Series([p.censored for p in parsed], index=series.index, dtype="bool"),
            f"{channel}_flag": pd.Series([p.flagged for p in parsed], index=series.index, dtype="bool"),
        },
        index=series.index,
    )

    summary = ParseSummary(channel=channel, total=len(parsed))
    known = rule.known_codes() | MODIFIER_CHARS
    for p in parsed:
        if p.status == "missing":
            summary.missing += 1
        elif p.status == "ambiguous":
            summary.ambiguous += 1
        elif p.status == "unparseable":
            summary.unparseable += 1
        summary.censored += p.censored
        summary.flagged += p.flagged
        summary.unknown_codes.update(c for c in p.codes if c not in known)

    return out, summary
