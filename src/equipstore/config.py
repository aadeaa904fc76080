"""Store configuration for equipstore."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from equipstore.exceptions import EquipmentConfigError

DEFAULT_STORAGE_KEY = "equipment-storage"


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Store configuration.

    Parameters
    ----------
    storage_key : str
        Namespace key the snapshot is loaded from and saved under.
    storage_dir : Path or None
        Directory for the JSON snapshot file. ``None`` keeps the store
        in memory only.
    persist_enabled : bool
        Load and save snapshots at all.
    items_per_page : int
        Initial page size of the consolidated view.
    api_base_url : str
        Base URL of the inventory API used by
        :class:`~equipstore.loader.HttpEquipmentSource`.
    """

    storage_key: str = DEFAULT_STORAGE_KEY
    storage_dir: Path | None = None
    persist_enabled: bool = True
    items_per_page: int = 10
    api_base_url: str = "http://localhost:8000/api"

    def __post_init__(self) -> None:
        if not self.storage_key.strip():
            raise EquipmentConfigError("storage_key must be non-empty")
        if self.items_per_page <= 0:
            raise EquipmentConfigError(f"items_per_page must be positive, got {self.items_per_page}")

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from ``EQUIPSTORE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        EquipmentConfigError
            When a numeric variable cannot be parsed or a value is invalid.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_CONFIG_MAP = {
            "EQUIPSTORE_STORAGE_KEY": "storage_key",
            "EQUIPSTORE_API_BASE_URL": "api_base_url",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        storage_dir = env.get("EQUIPSTORE_STORAGE_DIR")
        if storage_dir:
            config_kwargs["storage_dir"] = Path(storage_dir)

        config_kwargs["persist_enabled"] = _env_bool(env.get("EQUIPSTORE_PERSIST_ENABLED"), True)

        per_page_env = env.get("EQUIPSTORE_ITEMS_PER_PAGE")
        if per_page_env is not None and "items_per_page" not in overrides:
            try:
                config_kwargs["items_per_page"] = int(per_page_env)
            except ValueError as exc:
                raise EquipmentConfigError(f"EQUIPSTORE_ITEMS_PER_PAGE is not an integer: {per_page_env!r}") from exc

        config_kwargs.update(overrides)
        if isinstance(config_kwargs.get("storage_dir"), str):
            config_kwargs["storage_dir"] = Path(config_kwargs["storage_dir"])

        return cls(**config_kwargs)
