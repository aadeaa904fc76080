"""Equipment state store.

This is the only component allowed to replace the current snapshot.
Callers construct one store per session and pass it to whoever needs it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from pydantic import ValidationError

from equipstore.config import DEFAULT_STORAGE_KEY, StoreConfig
from equipstore.consolidation import DEFAULT_CATEGORY, DEFAULT_RULES, ClassificationRule
from equipstore.models import ConsolidatedEquipment, Equipment, EquipmentModel, EquipmentType
from equipstore.persistence import JsonFilePersistence, PersistenceAdapter
from equipstore.state.actions import Action, ActionType
from equipstore.state.reducer import reduce
from equipstore.state.snapshot import DEFAULT_ITEMS_PER_PAGE, EquipmentState, initial_state

_logger = logging.getLogger(__name__)

#: Version written in the persisted envelope; other versions are ignored on load.
STORAGE_VERSION = 0

Listener = Callable[[EquipmentState, EquipmentState], None]


class EquipmentStore:
    """Single dispatch point over an immutable :class:`EquipmentState`.

    Usage::

        store = EquipmentStore(persistence=JsonFilePersistence("/var/lib/equipstore"))
        store.set_equipments(records)
        store.consolidate_equipments()
        store.state.consolidated_equipments

    On construction the snapshot saved under *storage_key* is hydrated over
    the initial values. Any load problem falls back to the initial state.
    Every dispatched action is saved back under the same key; save failures
    are logged and otherwise ignored.
    """

    def __init__(
        self,
        *,
        persistence: PersistenceAdapter | None = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
        rules: Sequence[ClassificationRule] = DEFAULT_RULES,
        fallback_category: str = DEFAULT_CATEGORY,
    ) -> None:
        self._persistence = persistence
        self._storage_key = storage_key
        self._rules = tuple(rules)
        self._fallback_category = fallback_category
        self._listeners: list[Listener] = []
        self._state = self._hydrate(initial_state(items_per_page=items_per_page))

    @classmethod
    def from_config(cls, config: StoreConfig, **kwargs: Any) -> EquipmentStore:
        """Build a store from *config*, file-backed when a storage dir is set."""
        persistence: PersistenceAdapter | None = None
        if config.persist_enabled and config.storage_dir is not None:
            persistence = JsonFilePersistence(config.storage_dir)
        return cls(
            persistence=persistence,
            storage_key=config.storage_key,
            items_per_page=config.items_per_page,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Snapshot lifecycle
    # ------------------------------------------------------------------

    def _hydrate(self, initial: EquipmentState) -> EquipmentState:
        if self._persistence is None:
            return initial

        try:
            stored = self._persistence.load(self._storage_key)
        except Exception:
            _logger.debug("Snapshot load failed key=%s", self._storage_key, exc_info=True)
            return initial

        if stored is None:
            _logger.debug("No snapshot stored under key=%s", self._storage_key)
            return initial

        if not isinstance(stored, dict):
            _logger.debug("Ignoring non-object snapshot key=%s", self._storage_key)
            return initial

        persisted = stored.get("state")
        version = stored.get("version", STORAGE_VERSION)
        if not isinstance(persisted, dict) or version != STORAGE_VERSION:
            _logger.debug("Ignoring snapshot key=%s version=%s", self._storage_key, version)
            return initial

        # Persisted fields win; fields missing from the snapshot keep their initial value.
        merged = initial.to_persisted()
        merged.update(persisted)
        try:
            state = EquipmentState.model_validate(merged)
        except ValidationError:
            _logger.debug("Snapshot key=%s failed validation", self._storage_key, exc_info=True)
            return initial

        _logger.debug("Hydrated snapshot key=%s", self._storage_key)
        return state

    def _persist(self) -> None:
        if self._persistence is None:
            return
        try:
            self._persistence.save(
                self._storage_key,
                {"state": self._state.to_persisted(), "version": STORAGE_VERSION},
            )
        except Exception:
            _logger.debug("Snapshot save failed key=%s", self._storage_key, exc_info=True)

    @property
    def state(self) -> EquipmentState:
        """Current snapshot."""
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener(new_state, previous_state)* after every dispatch.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, action: Action) -> EquipmentState:
        """Reduce *action* into a new snapshot, persist it, notify listeners."""
        previous = self._state
        self._state = reduce(previous, action, rules=self._rules, fallback=self._fallback_category)
        _logger.debug("Applied action=%s", action.type)
        self._persist()
        for listener in list(self._listeners):
            try:
                listener(self._state, previous)
            except Exception:
                _logger.debug("Store listener failed for action=%s", action.type, exc_info=True)
        return self._state

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def set_selected_type(self, equipment_type: EquipmentType | None) -> None:
        """Select *equipment_type*; always clears the selected model."""
        self.dispatch(Action(type=ActionType.SET_SELECTED_TYPE, payload=equipment_type))

    def set_selected_model(self, model: EquipmentModel | None) -> None:
        self.dispatch(Action(type=ActionType.SET_SELECTED_MODEL, payload=model))

    def reset_selection(self) -> None:
        self.dispatch(Action(type=ActionType.RESET_SELECTION))

    # ------------------------------------------------------------------
    # Reference data (replaced wholesale)
    # ------------------------------------------------------------------

    def set_equipment_types(self, types: Iterable[EquipmentType]) -> None:
        self.dispatch(Action(type=ActionType.SET_EQUIPMENT_TYPES, payload=tuple(types)))

    def set_equipment_models(self, models: Iterable[EquipmentModel]) -> None:
        self.dispatch(Action(type=ActionType.SET_EQUIPMENT_MODELS, payload=tuple(models)))

    def set_equipments(self, equipments: Iterable[Equipment]) -> None:
        self.dispatch(Action(type=ActionType.SET_EQUIPMENTS, payload=tuple(equipments)))

    # ------------------------------------------------------------------
    # Pagination and load status
    # ------------------------------------------------------------------

    def set_current_page(self, page: int) -> None:
        self.dispatch(Action(type=ActionType.SET_CURRENT_PAGE, payload=page))

    def set_total_pages(self, pages: int) -> None:
        self.dispatch(Action(type=ActionType.SET_TOTAL_PAGES, payload=pages))

    def set_loading(self, is_loading: bool) -> None:
        self.dispatch(Action(type=ActionType.SET_LOADING, payload=is_loading))

    def set_error(self, error: str | None) -> None:
        self.dispatch(Action(type=ActionType.SET_ERROR, payload=error))

    # ------------------------------------------------------------------
    # Consolidated view
    # ------------------------------------------------------------------

    def consolidate_equipments(self) -> None:
        """Recompute the consolidated view from the current equipments (marks it clean)."""
        self.dispatch(Action(type=ActionType.CONSOLIDATE_EQUIPMENTS))

    def set_consolidated_equipments(self, equipments: Iterable[ConsolidatedEquipment]) -> None:
        """Replace the consolidated view with an external baseline (marks it clean)."""
        self.dispatch(Action(type=ActionType.SET_CONSOLIDATED_EQUIPMENTS, payload=tuple(equipments)))

    def update_consolidated_equipment(self, index: int, equipment: ConsolidatedEquipment) -> None:
        """Replace the entry at *index* (marks the view dirty).

        Raises
        ------
        ConsolidationIndexError
            When *index* is outside ``0 <= index < len(consolidated_equipments)``.
            The state is left unchanged.
        """
        self.dispatch(Action(type=ActionType.UPDATE_CONSOLIDATED_EQUIPMENT, payload=equipment, index=index))

    def set_is_consolidation_modified(self, is_modified: bool) -> None:
        self.dispatch(Action(type=ActionType.SET_IS_CONSOLIDATION_MODIFIED, payload=is_modified))
