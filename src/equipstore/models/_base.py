"""Base model for inventory records.

Every record model inherits from :class:`InventoryBaseModel` which
provides:

* ``populate_by_name=True`` so records accept either the Python field
  name (``quantity``) or the wire key used by the inventory API and the
  persisted snapshot (``quantite``).
* ``frozen=True`` so a record handed to the store can never be mutated
  behind its back; edits always go through a replacement record.
* :meth:`InventoryBaseModel.to_wire` which dumps with the wire keys.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class InventoryBaseModel(BaseModel):
    """Base for inventory records (frozen, alias-aware, extra keys ignored)."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Return a JSON-compatible dict keyed by wire names."""
        return self.model_dump(mode="json", by_alias=True)
