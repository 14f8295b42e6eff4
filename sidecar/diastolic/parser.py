"""
Two-pass extraction over the field registry.

Pass 1 walks the registry in order and fills each field from its first
successful rule. Pass 2 fills still-missing fields from their derive
functions, dependencies first. Values set in pass 1 are never replaced.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Optional

from ._field_data import FIELD_SPECS
from .fields import CanonicalValue, FieldSpec, ResultBag, round_to, to_number
from .matcher import Match, iter_matches
from .registry import FieldRegistry

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY = FieldRegistry(FIELD_SPECS)


def parse(text: Optional[str], registry: Optional[FieldRegistry] = None) -> ResultBag:
    """Extract every recognizable field from report text."""
    if registry is None:
        registry = DEFAULT_REGISTRY
    bag: ResultBag = {}
    if not isinstance(text, str) or not text.strip():
        return bag

    for spec in registry:
        if spec.key in bag:
            # Already set together with a grouped companion field.
            continue
        _match_field(text, spec, bag)

    for spec in registry.derivation_order:
        if spec.key in bag:
            continue
        try:
            value = spec.derive(MappingProxyType(bag))
        except Exception:
            logger.warning("Derivation failed for field '%s'", spec.key, exc_info=True)
            continue
        if value is not None:
            bag[spec.key] = value

    return bag


def _match_field(text: str, spec: FieldSpec, bag: ResultBag) -> None:
    view = MappingProxyType(bag)
    for m in iter_matches(text, spec):
        if spec.group_keys:
            values = _grouped_values(spec, m)
            if values is not None:
                bag.update(values)
                return
            continue

        try:
            value = spec.normalize(m.raw_value, m.raw_unit, view, m.context)
        except Exception:
            logger.warning("Normalization failed for field '%s'", spec.key, exc_info=True)
            return
        if value is not None:
            bag[spec.key] = value
            return


def _grouped_values(spec: FieldSpec, m: Match) -> Optional[dict[str, CanonicalValue]]:
    """One capture per grouped key; all of them must parse or none are used."""
    groups = m.groups
    if len(groups) < len(spec.group_keys):
        return None
    places = spec.places or 0
    values: dict[str, CanonicalValue] = {}
    for key, token in zip(spec.group_keys, groups):
        value = round_to(to_number(token), places)
        if value is None:
            return None
        values[key] = value
    return values
