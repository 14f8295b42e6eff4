"""Diastolic echo measurement extraction engine."""

from .fields import CanonicalValue, FieldSpec, ResultBag
from .matcher import Match, match
from .parser import DEFAULT_REGISTRY, parse
from .registry import FieldRegistry

__all__ = [
    "CanonicalValue",
    "DEFAULT_REGISTRY",
    "FieldRegistry",
    "FieldSpec",
    "Match",
    "ResultBag",
    "match",
    "parse",
]
