from __future__ import annotations

import pytest

from equipstore.consolidation import ClassificationRule
from equipstore.exceptions import ConsolidationIndexError
from equipstore.models import ConsolidatedEquipment, Equipment, EquipmentModel, EquipmentType
from equipstore.state.snapshot import EquipmentState
from equipstore.state.store import EquipmentStore


def _laptops() -> EquipmentType:
    return EquipmentType(id=1, name="Ordinateur Portable")


def _macbook() -> EquipmentModel:
    return EquipmentModel(id=10, name="MacBook Pro", type="Ordinateur Portable")


def _scenario_equipments() -> list[Equipment]:
    return [
        Equipment(id=1, name="Poste 1", model="Dell E24", quantity=3, status="actif"),
        Equipment(id=2, name="Poste 2", model="MacBook Pro", quantity=2, status="actif"),
        Equipment(id=3, name="Poste 3", model="Dell E24", quantity=1, status="stock"),
    ]


def test_initial_state_defaults() -> None:
    state = EquipmentStore().state

    assert state == EquipmentState()
    assert state.selected_type is None
    assert state.consolidated_equipments == ()
    assert state.is_consolidation_modified is False
    assert (state.current_page, state.total_pages, state.items_per_page) == (1, 1, 10)
    assert state.is_loading is False
    assert state.error is None


def test_selecting_type_clears_model() -> None:
    store = EquipmentStore()
    store.set_selected_type(_laptops())
    store.set_selected_model(_macbook())

    store.set_selected_type(_laptops())

    assert store.state.selected_type == _laptops()
    assert store.state.selected_model is None


def test_selecting_none_type_also_clears_model() -> None:
    store = EquipmentStore()
    store.set_selected_model(_macbook())

    store.set_selected_type(None)

    assert store.state.selected_model is None


def test_selecting_model_keeps_type() -> None:
    store = EquipmentStore()
    store.set_selected_type(_laptops())

    store.set_selected_model(_macbook())

    assert store.state.selected_type == _laptops()
    assert store.state.selected_model == _macbook()


def test_reset_selection_clears_both() -> None:
    store = EquipmentStore()
    store.set_selected_type(_laptops())
    store.set_selected_model(_macbook())

    store.reset_selection()

    assert store.state.selected_type is None
    assert store.state.selected_model is None


def test_reference_lists_are_replaced_wholesale() -> None:
    store = EquipmentStore()
    store.set_equipment_types([_laptops(), EquipmentType(id=2, name="Écran")])

    # Duplicate ids are accepted as-is.
    store.set_equipment_types([EquipmentType(id=3, name="Serveur"), EquipmentType(id=3, name="Serveur")])
    store.set_equipment_models([_macbook()])
    store.set_equipments(_scenario_equipments())

    assert [t.id for t in store.state.equipment_types] == [3, 3]
    assert store.state.equipment_models == (_macbook(),)
    assert len(store.state.equipments) == 3


def test_pagination_values_are_not_clamped() -> None:
    store = EquipmentStore()

    store.set_current_page(42)
    store.set_total_pages(0)

    assert store.state.current_page == 42
    assert store.state.total_pages == 0


def test_loading_and_error_are_independent() -> None:
    store = EquipmentStore()

    store.set_loading(True)
    store.set_error("boom")

    assert store.state.is_loading is True
    assert store.state.error == "boom"

    store.set_loading(False)
    assert store.state.error == "boom"


def test_consolidate_scenario() -> None:
    store = EquipmentStore()
    store.set_equipments(_scenario_equipments())

    store.consolidate_equipments()

    assert store.state.consolidated_equipments == (
        ConsolidatedEquipment(model="Dell E24", type="Autre", quantity=4),
        ConsolidatedEquipment(model="MacBook Pro", type="Ordinateur Portable", quantity=2),
    )
    assert store.state.is_consolidation_modified is False
    assert [entry.to_wire() for entry in store.state.consolidated_equipments] == [
        {"modele": "Dell E24", "type": "Autre", "quantite": 4},
        {"modele": "MacBook Pro", "type": "Ordinateur Portable", "quantite": 2},
    ]


def test_consolidate_is_idempotent() -> None:
    store = EquipmentStore()
    store.set_equipments(_scenario_equipments())

    store.consolidate_equipments()
    first = store.state.consolidated_equipments
    store.consolidate_equipments()

    assert store.state.consolidated_equipments == first
    assert store.state.is_consolidation_modified is False


def test_consolidate_empty_equipments() -> None:
    store = EquipmentStore()
    store.set_consolidated_equipments([ConsolidatedEquipment(model="A", type="Autre", quantity=1)])

    store.consolidate_equipments()

    assert store.state.consolidated_equipments == ()


def test_update_marks_dirty_and_consolidate_marks_clean() -> None:
    store = EquipmentStore()
    store.set_equipments(_scenario_equipments())
    store.consolidate_equipments()

    edited = ConsolidatedEquipment(model="Dell E24", type="Écran", quantity=10)
    store.update_consolidated_equipment(0, edited)

    assert store.state.consolidated_equipments[0] == edited
    assert store.state.consolidated_equipments[1].model == "MacBook Pro"
    assert store.state.is_consolidation_modified is True

    store.consolidate_equipments()

    assert store.state.consolidated_equipments[0].quantity == 4
    assert store.state.is_consolidation_modified is False


def test_update_accepts_any_replacement_fields() -> None:
    store = EquipmentStore()
    store.set_consolidated_equipments([ConsolidatedEquipment(model="A", type="Autre", quantity=1)])

    store.update_consolidated_equipment(0, ConsolidatedEquipment(model="", type="Inconnu", quantity=-5))

    assert store.state.consolidated_equipments[0].quantity == -5


@pytest.mark.parametrize("index", [-1, 2, 99])
def test_update_out_of_range_raises_and_leaves_state(index: int) -> None:
    store = EquipmentStore()
    store.set_consolidated_equipments(
        [
            ConsolidatedEquipment(model="A", type="Autre", quantity=1),
            ConsolidatedEquipment(model="B", type="Autre", quantity=2),
        ]
    )
    before = store.state

    with pytest.raises(ConsolidationIndexError) as exc_info:
        store.update_consolidated_equipment(index, ConsolidatedEquipment(model="C", type="Autre", quantity=3))

    assert exc_info.value.index == index
    assert exc_info.value.length == 2
    assert isinstance(exc_info.value, IndexError)
    assert store.state is before
    assert store.state.is_consolidation_modified is False


def test_set_consolidated_is_a_clean_baseline() -> None:
    store = EquipmentStore()
    store.set_consolidated_equipments([ConsolidatedEquipment(model="A", type="Autre", quantity=1)])
    store.update_consolidated_equipment(0, ConsolidatedEquipment(model="A", type="Autre", quantity=2))
    assert store.state.is_consolidation_modified is True

    store.set_consolidated_equipments([ConsolidatedEquipment(model="B", type="Serveur", quantity=3)])

    assert store.state.is_consolidation_modified is False
    assert [entry.model for entry in store.state.consolidated_equipments] == ["B"]


def test_modified_flag_override() -> None:
    store = EquipmentStore()

    store.set_is_consolidation_modified(True)
    assert store.state.is_consolidation_modified is True
    store.set_is_consolidation_modified(True)
    assert store.state.is_consolidation_modified is True
    store.set_is_consolidation_modified(False)
    assert store.state.is_consolidation_modified is False


def test_previous_snapshots_are_not_mutated() -> None:
    store = EquipmentStore()
    store.set_equipments(_scenario_equipments())
    before = store.state

    store.consolidate_equipments()

    assert before.consolidated_equipments == ()
    assert store.state is not before


def test_subscribers_receive_new_and_previous_state() -> None:
    store = EquipmentStore()
    calls: list[tuple[int, int]] = []
    unsubscribe = store.subscribe(lambda new, old: calls.append((new.current_page, old.current_page)))

    store.set_current_page(2)
    unsubscribe()
    store.set_current_page(3)

    assert calls == [(2, 1)]


def test_failing_subscriber_does_not_break_dispatch() -> None:
    store = EquipmentStore()
    seen: list[int] = []

    def _broken(_new: EquipmentState, _old: EquipmentState) -> None:
        raise RuntimeError("listener bug")

    store.subscribe(_broken)
    store.subscribe(lambda new, _old: seen.append(new.total_pages))

    store.set_total_pages(5)

    assert store.state.total_pages == 5
    assert seen == [5]


def test_custom_rules_are_used_by_store() -> None:
    store = EquipmentStore(rules=(ClassificationRule(("Dell",), "Moniteur"),), fallback_category="Divers")
    store.set_equipments(_scenario_equipments())

    store.consolidate_equipments()

    assert [entry.type for entry in store.state.consolidated_equipments] == ["Moniteur", "Divers"]
