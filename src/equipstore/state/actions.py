"""Actions accepted by the equipment state reducer.

Every mutation of the store is expressed as one of these records. Only
the reducer interprets them.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ActionType(StrEnum):
    SET_SELECTED_TYPE = "setSelectedType"
    SET_SELECTED_MODEL = "setSelectedModel"
    RESET_SELECTION = "resetSelection"
    SET_EQUIPMENT_TYPES = "setEquipmentTypes"
    SET_EQUIPMENT_MODELS = "setEquipmentModels"
    SET_EQUIPMENTS = "setEquipments"
    SET_CURRENT_PAGE = "setCurrentPage"
    SET_TOTAL_PAGES = "setTotalPages"
    SET_LOADING = "setLoading"
    SET_ERROR = "setError"
    SET_CONSOLIDATED_EQUIPMENTS = "setConsolidatedEquipments"
    UPDATE_CONSOLIDATED_EQUIPMENT = "updateConsolidatedEquipment"
    CONSOLIDATE_EQUIPMENTS = "consolidateEquipments"
    SET_IS_CONSOLIDATION_MODIFIED = "setIsConsolidationModified"


class Action(BaseModel):
    """A single state change request.

    ``payload`` carries the new value (record, list, int, bool or message);
    ``index`` is only used by ``UPDATE_CONSOLIDATED_EQUIPMENT``.
    """

    model_config = ConfigDict(frozen=True)

    type: ActionType
    payload: Any = None
    index: int | None = None
