"""equipstore - State container for an equipment inventory."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("equipstore")
except PackageNotFoundError:
    __version__ = "0+local"
from equipstore.config import StoreConfig
from equipstore.consolidation import DEFAULT_RULES, ClassificationRule, classify_model, consolidate
from equipstore.exceptions import (
    ConsolidationIndexError,
    EquipmentConfigError,
    EquipmentSourceError,
    EquipmentStoreError,
    PersistenceError,
)
from equipstore.models import (
    ConsolidatedEquipment,
    Equipment,
    EquipmentCategory,
    EquipmentModel,
    EquipmentType,
)
from equipstore.persistence import JsonFilePersistence, MemoryPersistence, PersistenceAdapter
from equipstore.state.actions import Action, ActionType
from equipstore.state.reducer import reduce
from equipstore.state.snapshot import EquipmentState
from equipstore.state.store import EquipmentStore

__all__ = [
    "__version__",
    "Action",
    "ActionType",
    "ClassificationRule",
    "ConsolidatedEquipment",
    "ConsolidationIndexError",
    "DEFAULT_RULES",
    "Equipment",
    "EquipmentCategory",
    "EquipmentConfigError",
    "EquipmentModel",
    "EquipmentSourceError",
    "EquipmentState",
    "EquipmentStore",
    "EquipmentStoreError",
    "EquipmentType",
    "JsonFilePersistence",
    "MemoryPersistence",
    "PersistenceAdapter",
    "PersistenceError",
    "StoreConfig",
    "classify_model",
    "consolidate",
    "reduce",
]
