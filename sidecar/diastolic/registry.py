from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from .fields import FieldSpec

logger = logging.getLogger(__name__)


class FieldRegistry:
    """Ordered, read-only collection of field definitions."""

    def __init__(self, specs: Iterable[FieldSpec]):
        self._specs: list[FieldSpec] = []
        self._by_key: dict[str, FieldSpec] = {}
        for spec in specs:
            if spec.key in self._by_key:
                raise ValueError(f"Duplicate field key '{spec.key}'")
            self._specs.append(spec)
            self._by_key[spec.key] = spec

        for spec in self._specs:
            missing = [k for k in spec.depends_on if k not in self._by_key]
            if missing:
                raise ValueError(f"Field '{spec.key}' depends on unknown fields: {missing}")
            unknown_group = [k for k in spec.group_keys if k not in self._by_key]
            if unknown_group:
                raise ValueError(f"Field '{spec.key}' groups unknown fields: {unknown_group}")

        self._derivation_order = tuple(self._resolve_derivation_order())
        logger.debug(
            "Field registry ready: %d fields, %d derivable",
            len(self._specs),
            len(self._derivation_order),
        )

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get(self, key: str) -> Optional[FieldSpec]:
        return self._by_key.get(key)

    def keys(self) -> list[str]:
        return [spec.key for spec in self._specs]

    @property
    def derivation_order(self) -> tuple[FieldSpec, ...]:
        """Derivable fields, each placed after the fields it depends on."""
        return self._derivation_order

    def list_fields(self) -> list[dict]:
        """Return metadata for listing, in registry order."""
        return [
            {
                "key": spec.key,
                "label": spec.label,
                "unit": spec.unit,
                "places": spec.places,
                "derived": spec.derived,
            }
            for spec in self._specs
        ]

    def _resolve_derivation_order(self) -> list[FieldSpec]:
        # Depth-first over depends_on; registry order breaks ties.
        ordered: list[FieldSpec] = []
        done: set[str] = set()
        visiting: set[str] = set()

        def visit(spec: FieldSpec) -> None:
            if spec.key in done:
                return
            if spec.key in visiting:
                raise ValueError(f"Derivation cycle through field '{spec.key}'")
            visiting.add(spec.key)
            for dep_key in spec.depends_on:
                visit(self._by_key[dep_key])
            visiting.discard(spec.key)
            done.add(spec.key)
            if spec.derived:
                ordered.append(spec)

        for spec in self._specs:
            visit(spec)
        return ordered
