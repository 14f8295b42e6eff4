"""Normalization factories shared by the field table.

Each factory returns a pure function with the signature
``normalize(raw_value, raw_unit, bag, match)``; none of them touch ``bag``.
"""

from __future__ import annotations

import re
from typing import Optional

from .fields import CanonicalValue, Normalizer, round_to, to_number

_AF_RE = re.compile(r"atrial\s*fibrillation|afib|\baf\b", re.IGNORECASE)
_SINUS_RE = re.compile(r"sinus\s*rhythm|\bnsr\b", re.IGNORECASE)


def _unit_token(raw_unit: Optional[str]) -> Optional[str]:
    if raw_unit is None:
        return None
    token = re.sub(r"\s+", "", raw_unit).lower()
    return token or None


def number(places: int) -> Normalizer:
    """Plain numeric field: strip, parse, round."""

    def _normalize(raw_value, raw_unit, bag, match):
        return round_to(to_number(raw_value), places)

    return _normalize


def velocity_m_s(places: int = 3) -> Normalizer:
    """Blood-flow velocity canonicalized to m/s; a missing unit means m/s."""

    def _normalize(raw_value, raw_unit, bag, match):
        value = to_number(raw_value)
        if value is None:
            return None
        if _unit_token(raw_unit) == "cm/s":
            value = value / 100
        return round_to(value, places)

    return _normalize


def tissue_velocity_cm_s(places: int = 2) -> Normalizer:
    """Tissue-Doppler velocity canonicalized to cm/s; a missing unit means cm/s."""

    def _normalize(raw_value, raw_unit, bag, match):
        value = to_number(raw_value)
        if value is None:
            return None
        if _unit_token(raw_unit) == "m/s":
            value = value * 100
        return round_to(value, places)

    return _normalize


def classify_rhythm(text: str) -> Optional[str]:
    if _AF_RE.search(text):
        return "AF"
    if _SINUS_RE.search(text):
        return "Sinus"
    return None


def rhythm() -> Normalizer:
    """Categorical rhythm: AF / Sinus vocabulary first, else the captured text."""

    def _normalize(raw_value, raw_unit, bag, match) -> Optional[CanonicalValue]:
        full_text = match.group(0) if match is not None else ""
        label = classify_rhythm(full_text)
        if label is not None:
            return label
        if raw_value:
            return raw_value.strip() or None
        return None

    return _normalize
