"""Qualifier code vocabulary and per-channel rule tables.

Laboratory and field extracts attach short codes to numeric cells:

- J / J*  estimated value
- B       value near the detection limit
- U / U<  non-detect, recorded at the reporting limit (left-censored)
- >       value beyond the measurable range, e.g. Secchi disk on bottom
          (right-censored)

"E" is never a qualifier; it only appears as the exponent of scientific
notation. "*" and "<" are modifiers that ride along with a letter code.

Which codes mean "censored" and which mean "flagged" differs by channel, so
each channel gets a QualifierRule. The table lives here, away from the
parsing code, so it can be read and tested on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

# Characters that may appear in a qualifier string
QUALIFIER_CHARS = frozenset("ABCDFGHIJKLMNOPQRSTUVWXYZ<>*")

# Modifiers that never change the outcome on their own
MODIFIER_CHARS = frozenset("*")


@dataclass(frozen=True)
class QualifierRule:
    """How one channel interprets its qualifier codes.

    Attributes:
        censor_codes: Codes that mark the value as censored
        flag_codes: Codes that mark the value as flagged
        combined_rules: Ordered (code string, censored, flagged) overrides,
            matched exactly against the qualifier string before the
            per-code lookup
        censor_direction: "left" for non-detects, "right" for values beyond
            the upper end of the method
    """

    censor_codes: frozenset[str] = frozenset({"U", "<"})
    flag_codes: frozenset[str] = frozenset({"J"})
    combined_rules: tuple[tuple[str, bool, bool], ...] = ()
    censor_direction: Literal["left", "right"] = "left"

    def known_codes(self) -> frozenset[str]:
        """All codes this rule assigns meaning to."""
        combined = {c for code, _, _ in self.combined_rules for c in code}
        return self.censor_codes | self.flag_codes | frozenset(combined)

    def resolve(self, codes: str) -> tuple[bool, bool]:
        """Return (censored, flagged) for a qualifier string such as "JB".

        Args:
            codes: Qualifier characters stripped from a cell, in order

        Returns:
            Tuple of (censored, flagged)
        """
        key = "".join(c for c in codes if c not in MODIFIER_CHARS)
        for pattern, censored, flagged in self.combined_rules:
            if key == pattern:
                return censored, flagged

        censored = any(c in self.censor_codes for c in key)
        flagged = any(c in self.flag_codes for c in key)
        return censored, flagged


DEFAULT_RULE = QualifierRule()

# Channel name -> rule. Channels not listed use DEFAULT_RULE.
CHANNEL_RULES: dict[str, QualifierRule] = {
    "turbidity": QualifierRule(
        censor_codes=frozenset({"U", "<"}),
        flag_codes=frozenset(),
    ),
    "chl": QualifierRule(
        censor_codes=frozenset({"U", "<"}),
        flag_codes=frozenset({"J"}),
    ),
    "nox": QualifierRule(
        censor_codes=frozenset({"U", "<"}),
        flag_codes=frozenset({"J"}),
        combined_rules=(("JB", False, True),),
    ),
    "nh4": QualifierRule(
        censor_codes=frozenset({"U", "<"}),
        flag_codes=frozenset({"J"}),
        combined_rules=(("JB", False, True),),
    ),
    "tn": QualifierRule(
        censor_codes=frozenset({"U", "<"}),
        flag_codes=frozenset({"J", "B"}),
    ),
    "tp": QualifierRule(
        censor_codes=frozenset({"U", "<"}),
        flag_codes=frozenset({"J", "B"}),
    ),
    "secchi": QualifierRule(
        censor_codes=frozenset({">"}),
        flag_codes=frozenset(),
        censor_direction="right",
    ),
}


def rule_for(channel: str) -> QualifierRule:
    """Look up the qualifier rule for a channel, falling back to the default."""
    return CHANNEL_RULES.get(channel, DEFAULT_RULE)
