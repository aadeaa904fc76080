"""Custom exception hierarchy for equipstore."""

from __future__ import annotations


class EquipmentStoreError(Exception):
    """Base exception for all equipstore errors."""


class EquipmentConfigError(EquipmentStoreError):
    """Invalid or missing configuration."""


class ConsolidationIndexError(EquipmentStoreError, IndexError):
    """Consolidated-view edit addressed an index outside the current list.

    The store is left untouched when this is raised.
    """

    def __init__(self, index: int | None, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f"Consolidated index {index} out of range for {length} entries")


class PersistenceError(EquipmentStoreError):
    """Snapshot could not be loaded from or saved to storage."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class EquipmentSourceError(EquipmentStoreError):
    """Data-source failure (network, non-200, invalid JSON, bad records)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)
