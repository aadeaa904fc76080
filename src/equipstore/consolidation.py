"""Consolidation of raw equipment records into a per-model view.

Pure functions only: nothing here reads or writes store state, so the
engine can be exercised directly on lists of records.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence

from equipstore.models import ConsolidatedEquipment, Equipment, EquipmentCategory


@dataclasses.dataclass(frozen=True)
class ClassificationRule:
    """Map model strings containing any of *patterns* to *category*.

    Matching is a case-sensitive substring test.
    """

    patterns: tuple[str, ...]
    category: str

    def matches(self, model: str) -> bool:
        return any(pattern in model for pattern in self.patterns)


# Evaluated top to bottom; first match wins.
DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(("Écran",), EquipmentCategory.SCREEN.value),
    ClassificationRule(("Portable", "MacBook"), EquipmentCategory.LAPTOP.value),
    ClassificationRule(("Serveur", "PowerEdge"), EquipmentCategory.SERVER.value),
)

DEFAULT_CATEGORY: str = EquipmentCategory.OTHER.value


def classify_model(
    model: str,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
    *,
    fallback: str = DEFAULT_CATEGORY,
) -> str:
    """Return the category of the first rule matching *model*, else *fallback*."""
    for rule in rules:
        if rule.matches(model):
            return rule.category
    return fallback


def consolidate(
    equipments: Iterable[Equipment],
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
    *,
    fallback: str = DEFAULT_CATEGORY,
) -> list[ConsolidatedEquipment]:
    """Group *equipments* by exact model string and sum their quantities.

    Entries come out in first-occurrence order. An entry's ``type`` is
    classified once, from its first record, and later records with the
    same model only add to ``quantity``.
    """
    types: dict[str, str] = {}
    quantities: dict[str, int] = {}
    for equipment in equipments:
        key = equipment.model
        if key in quantities:
            quantities[key] += equipment.quantity
            continue
        types[key] = classify_model(key, rules, fallback=fallback)
        quantities[key] = equipment.quantity

    return [ConsolidatedEquipment(model=key, type=types[key], quantity=quantity) for key, quantity in quantities.items()]
