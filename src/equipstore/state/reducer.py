"""Pure reducer for the equipment store.

``reduce(state, action)`` never mutates *state*; it returns a new
snapshot. The only failure it raises is :class:`ConsolidationIndexError`
for an out-of-range consolidated-view edit.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from equipstore.consolidation import DEFAULT_CATEGORY, DEFAULT_RULES, ClassificationRule, consolidate
from equipstore.exceptions import ConsolidationIndexError
from equipstore.state.actions import Action, ActionType
from equipstore.state.snapshot import EquipmentState

_Handler = Callable[[EquipmentState, Action], dict[str, Any]]


def _set_selected_type(_state: EquipmentState, action: Action) -> dict[str, Any]:
    # A model choice is only meaningful under the type it was picked for.
    return {"selected_type": action.payload, "selected_model": None}


def _set_selected_model(_state: EquipmentState, action: Action) -> dict[str, Any]:
    return {"selected_model": action.payload}


def _reset_selection(_state: EquipmentState, _action: Action) -> dict[str, Any]:
    return {"selected_type": None, "selected_model": None}


def _replace(field_name: str) -> _Handler:
    def handler(_state: EquipmentState, action: Action) -> dict[str, Any]:
        return {field_name: tuple(action.payload)}

    return handler


def _assign(field_name: str) -> _Handler:
    def handler(_state: EquipmentState, action: Action) -> dict[str, Any]:
        return {field_name: action.payload}

    return handler


def _set_consolidated(_state: EquipmentState, action: Action) -> dict[str, Any]:
    return {"consolidated_equipments": tuple(action.payload), "is_consolidation_modified": False}


def _update_consolidated(state: EquipmentState, action: Action) -> dict[str, Any]:
    entries = list(state.consolidated_equipments)
    index = action.index
    if index is None or not 0 <= index < len(entries):
        raise ConsolidationIndexError(index, len(entries))
    entries[index] = action.payload
    return {"consolidated_equipments": tuple(entries), "is_consolidation_modified": True}


_HANDLERS: dict[ActionType, _Handler] = {
    ActionType.SET_SELECTED_TYPE: _set_selected_type,
    ActionType.SET_SELECTED_MODEL: _set_selected_model,
    ActionType.RESET_SELECTION: _reset_selection,
    ActionType.SET_EQUIPMENT_TYPES: _replace("equipment_types"),
    ActionType.SET_EQUIPMENT_MODELS: _replace("equipment_models"),
    ActionType.SET_EQUIPMENTS: _replace("equipments"),
    ActionType.SET_CURRENT_PAGE: _assign("current_page"),
    ActionType.SET_TOTAL_PAGES: _assign("total_pages"),
    ActionType.SET_LOADING: _assign("is_loading"),
    ActionType.SET_ERROR: _assign("error"),
    ActionType.SET_CONSOLIDATED_EQUIPMENTS: _set_consolidated,
    ActionType.UPDATE_CONSOLIDATED_EQUIPMENT: _update_consolidated,
    ActionType.SET_IS_CONSOLIDATION_MODIFIED: _assign("is_consolidation_modified"),
}


def reduce(
    state: EquipmentState,
    action: Action,
    *,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
    fallback: str = DEFAULT_CATEGORY,
) -> EquipmentState:
    """Return the snapshot produced by applying *action* to *state*."""
    if action.type == ActionType.CONSOLIDATE_EQUIPMENTS:
        consolidated = consolidate(state.equipments, rules, fallback=fallback)
        update = {"consolidated_equipments": tuple(consolidated), "is_consolidation_modified": False}
    else:
        update = _HANDLERS[action.type](state, action)
    return state.model_copy(update=update)
