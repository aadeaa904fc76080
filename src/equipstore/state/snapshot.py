"""Immutable snapshot of the equipment store."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from equipstore.models import ConsolidatedEquipment, Equipment, EquipmentModel, EquipmentType

DEFAULT_ITEMS_PER_PAGE = 10


class EquipmentState(BaseModel):
    """Every serializable field of the store.

    Field names are snake_case in Python and camelCase in the persisted
    snapshot (``selected_type`` <-> ``selectedType``).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    selected_type: EquipmentType | None = None
    selected_model: EquipmentModel | None = None

    equipment_types: tuple[EquipmentType, ...] = ()
    equipment_models: tuple[EquipmentModel, ...] = ()
    equipments: tuple[Equipment, ...] = ()

    consolidated_equipments: tuple[ConsolidatedEquipment, ...] = ()
    is_consolidation_modified: bool = False

    current_page: int = 1
    total_pages: int = 1
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE

    is_loading: bool = False
    error: str | None = None

    def to_persisted(self) -> dict[str, Any]:
        """Return the camelCase, JSON-compatible form written to storage."""
        return self.model_dump(mode="json", by_alias=True)


def initial_state(*, items_per_page: int = DEFAULT_ITEMS_PER_PAGE) -> EquipmentState:
    return EquipmentState(items_per_page=items_per_page)
