"""
Paste interception decisions.

Mirrors the browser handler's checks in order: scope, empty text, modifier
key, report heuristic, then the minimum number of extracted fields.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from diastolic import CanonicalValue, parse
from .destinations import mapped_entries, merge_destinations
from .heuristics import looks_like_report

DEFAULT_SIGNALS_MIN = int(os.getenv("PASTE_SIGNALS_MIN", "2"))


class PasteScope(str, Enum):
    ANYWHERE = "anywhere"
    INPUTS_ONLY = "inputs-only"


class PasteTrigger(str, Enum):
    AUTO = "auto"
    MODIFIER = "modifier"


class SkipReason(str, Enum):
    OUTSIDE_TEXT_ENTRY = "outside_text_entry"
    EMPTY = "empty"
    MODIFIER_REQUIRED = "modifier_required"
    NOT_A_REPORT = "not_a_report"
    TOO_FEW_FIELDS = "too_few_fields"
    NO_DESTINATIONS = "no_destinations"


class PasteOptions(BaseModel):
    scope: PasteScope = PasteScope.ANYWHERE
    trigger: PasteTrigger = PasteTrigger.AUTO
    only_when_multiline: bool = True
    signals_min: int = Field(default_factory=lambda: DEFAULT_SIGNALS_MIN, ge=0)


class PasteDecision(BaseModel):
    intercept: bool
    reason: Optional[SkipReason] = None
    signal_count: int = 0
    values: dict[str, CanonicalValue] = Field(default_factory=dict)


class PasteOutcome(PasteDecision):
    assignments: dict[str, CanonicalValue] = Field(default_factory=dict)
    updated: int = 0
    message: Optional[str] = None


def decide(
    text: Optional[str],
    options: Optional[PasteOptions] = None,
    *,
    in_text_entry: bool = False,
    modifier: bool = False,
) -> PasteDecision:
    """Decide whether a paste should be taken over by the form filler."""
    options = options or PasteOptions()

    if options.scope == PasteScope.INPUTS_ONLY and not in_text_entry:
        return PasteDecision(intercept=False, reason=SkipReason.OUTSIDE_TEXT_ENTRY)
    if not text:
        return PasteDecision(intercept=False, reason=SkipReason.EMPTY)
    if options.trigger == PasteTrigger.MODIFIER and not modifier:
        return PasteDecision(intercept=False, reason=SkipReason.MODIFIER_REQUIRED)

    has_signals = looks_like_report(text) if options.only_when_multiline else True
    bag = parse(text)
    signal_count = len(bag)
    enough = signal_count >= (options.signals_min or 1)

    if not has_signals:
        reason = SkipReason.NOT_A_REPORT
    elif not enough:
        reason = SkipReason.TOO_FEW_FIELDS
    else:
        reason = None
    return PasteDecision(
        intercept=reason is None,
        reason=reason,
        signal_count=signal_count,
        values=bag,
    )


def fill_message(updated: int) -> str:
    return f"Diastolic paste: filled {updated} field{'' if updated == 1 else 's'}."


def handle_paste(
    text: Optional[str],
    options: Optional[PasteOptions] = None,
    *,
    destinations: Optional[Mapping[str, str]] = None,
    in_text_entry: bool = False,
    modifier: bool = False,
) -> PasteOutcome:
    """Decide, then plan which form destinations receive which values."""
    decision = decide(text, options, in_text_entry=in_text_entry, modifier=modifier)
    outcome = PasteOutcome(**decision.model_dump())
    if not decision.intercept:
        return outcome

    entries = mapped_entries(decision.values, merge_destinations(destinations))
    outcome.assignments = {destination: value for _, destination, value in entries}
    outcome.updated = len(entries)
    if outcome.updated > 0:
        outcome.message = fill_message(outcome.updated)
    elif in_text_entry:
        # Nothing is wired up, so the normal paste goes through.
        outcome.intercept = False
        outcome.reason = SkipReason.NO_DESTINATIONS
    return outcome
