from .destinations import DEFAULT_DESTINATIONS, apply_bag, mapped_entries, merge_destinations, plan_assignments
from .heuristics import looks_like_report
from .intercept import (
    PasteDecision,
    PasteOptions,
    PasteOutcome,
    PasteScope,
    PasteTrigger,
    SkipReason,
    decide,
    fill_message,
    handle_paste,
)

__all__ = [
    "DEFAULT_DESTINATIONS",
    "PasteDecision",
    "PasteOptions",
    "PasteOutcome",
    "PasteScope",
    "PasteTrigger",
    "SkipReason",
    "apply_bag",
    "decide",
    "fill_message",
    "handle_paste",
    "looks_like_report",
    "mapped_entries",
    "merge_destinations",
    "plan_assignments",
]
