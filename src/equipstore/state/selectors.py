"""Read-only views over an :class:`EquipmentState`."""

from __future__ import annotations

import math
from collections.abc import Iterable

from equipstore.models import ConsolidatedEquipment, Equipment, EquipmentModel
from equipstore.state.snapshot import EquipmentState


def page_count(total_items: int, items_per_page: int) -> int:
    """Number of pages needed for *total_items*; never less than 1."""
    if items_per_page <= 0 or total_items <= 0:
        return 1
    return math.ceil(total_items / items_per_page)


def current_page_items(state: EquipmentState) -> tuple[ConsolidatedEquipment, ...]:
    """Slice of the consolidated view shown on ``state.current_page`` (1-based).

    The page number is not clamped; a page past the end is simply empty.
    """
    if state.current_page < 1 or state.items_per_page <= 0:
        return ()
    start = (state.current_page - 1) * state.items_per_page
    return state.consolidated_equipments[start : start + state.items_per_page]


def total_quantity(records: Iterable[Equipment | ConsolidatedEquipment]) -> int:
    return sum(record.quantity for record in records)


def models_for_selected_type(state: EquipmentState) -> tuple[EquipmentModel, ...]:
    """Equipment models belonging to the selected type (all models when none is selected)."""
    if state.selected_type is None:
        return state.equipment_models
    type_name = state.selected_type.name
    return tuple(model for model in state.equipment_models if model.type == type_name)
