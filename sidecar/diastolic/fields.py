"""
Field definitions for the diastolic extraction engine.

A FieldSpec is static configuration: an ordered list of regex rules, a
normalize function for direct matches and an optional derive function that
fills the field from other resolved values.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Callable, Mapping, Optional, Union

CanonicalValue = Union[int, float, str]
ResultBag = dict[str, CanonicalValue]

# normalize(raw_value, raw_unit, bag_so_far, full_match)
Normalizer = Callable[
    [Optional[str], Optional[str], Mapping[str, CanonicalValue], "re.Match[str]"],
    Optional[CanonicalValue],
]
# derive(bag)
Deriver = Callable[[Mapping[str, CanonicalValue]], Optional[CanonicalValue]]

_NON_NUMERIC_RE = re.compile(r"[^0-9.+\-]")


def to_number(raw: Any) -> Optional[float]:
    """Parse a raw token, keeping only digits, sign and decimal point."""
    if raw is None:
        return None
    cleaned = _NON_NUMERIC_RE.sub("", str(raw))
    if not cleaned:
        return None
    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def round_to(value: Optional[float], places: int) -> Optional[Union[int, float]]:
    """Round half-up to a fixed number of decimals; zero places gives an int."""
    if value is None or not math.isfinite(value):
        return None
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # Enough digits for the integer part plus the kept decimals.
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        rounded = exact.quantize(quantum, rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    return float(rounded)


@dataclass(frozen=True)
class FieldSpec:
    """Definition of one field the engine can fill."""

    key: str
    label: str
    unit: str
    rules: tuple[re.Pattern[str], ...]
    normalize: Normalizer
    derive: Optional[Deriver] = None
    depends_on: tuple[str, ...] = ()
    # Rules of a grouped field capture one token per key and set them together.
    group_keys: tuple[str, ...] = ()
    places: Optional[int] = None
    # A match is skipped when the text just before it matches this pattern.
    not_after: Optional[re.Pattern[str]] = None

    @property
    def derived(self) -> bool:
        return self.derive is not None


def compile_rules(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def field_spec(
    key: str,
    label: str,
    unit: str,
    patterns: list[str],
    normalize: Normalizer,
    *,
    derive: Optional[Deriver] = None,
    depends_on: tuple[str, ...] = (),
    group_keys: tuple[str, ...] = (),
    places: Optional[int] = None,
    not_after: Optional[str] = None,
) -> FieldSpec:
    return FieldSpec(
        key=key,
        label=label,
        unit=unit,
        rules=compile_rules(*patterns),
        normalize=normalize,
        derive=derive,
        depends_on=depends_on,
        group_keys=group_keys,
        places=places,
        not_after=re.compile(not_after, re.IGNORECASE) if not_after else None,
    )


__all__ = [
    "CanonicalValue",
    "Deriver",
    "FieldSpec",
    "Normalizer",
    "ResultBag",
    "compile_rules",
    "field_spec",
    "round_to",
    "to_number",
]
