"""Data models for inventory records."""

from equipstore.models._base import InventoryBaseModel
from equipstore.models.equipment import (
    ConsolidatedEquipment,
    Equipment,
    EquipmentCategory,
    EquipmentModel,
    EquipmentType,
)

__all__ = [
    "ConsolidatedEquipment",
    "Equipment",
    "EquipmentCategory",
    "EquipmentModel",
    "EquipmentType",
    "InventoryBaseModel",
]
