"""
Rule matching for field definitions.

Rules are tried in declared order. The first capture group is the raw value,
the second (when the rule has one) the raw unit token.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from .fields import FieldSpec

# How far back a not_after pattern looks.
_LOOKBACK_CHARS = 40


@dataclass(frozen=True)
class Match:
    raw_value: Optional[str]
    raw_unit: Optional[str]
    context: re.Match[str]
    rule_index: int

    @property
    def groups(self) -> tuple[Optional[str], ...]:
        return self.context.groups()

    @property
    def text(self) -> str:
        return self.context.group(0)


def _to_match(m: re.Match[str], rule_index: int) -> Match:
    groups = m.groups()
    raw_value = groups[0] if len(groups) >= 1 else None
    raw_unit = groups[1] if len(groups) >= 2 else None
    return Match(raw_value=raw_value, raw_unit=raw_unit, context=m, rule_index=rule_index)


def _search(rule: re.Pattern[str], text: str, not_after: Optional[re.Pattern[str]]) -> Optional[re.Match[str]]:
    """First hit of ``rule`` whose preceding text is not excluded."""
    pos = 0
    while True:
        m = rule.search(text, pos)
        if m is None or not_after is None:
            return m
        before = text[max(0, m.start() - _LOOKBACK_CHARS):m.start()]
        if not not_after.search(before):
            return m
        pos = m.start() + 1


def iter_matches(text: str, spec: FieldSpec) -> Iterator[Match]:
    """Yield the first accepted hit of each rule, in rule order."""
    for index, rule in enumerate(spec.rules):
        m = _search(rule, text, spec.not_after)
        if m:
            yield _to_match(m, index)


def match(text: str, spec: FieldSpec) -> Optional[Match]:
    """Return the first matching rule's capture, or None."""
    return next(iter_matches(text, spec), None)
