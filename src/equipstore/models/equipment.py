"""Equipment reference and inventory records."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from equipstore.models._base import InventoryBaseModel


class EquipmentCategory(StrEnum):
    """Categories assigned by the built-in classification rules."""

    SCREEN = "Écran"
    LAPTOP = "Ordinateur Portable"
    SERVER = "Serveur"
    OTHER = "Autre"


class EquipmentType(InventoryBaseModel):
    """An equipment type from the reference list.

    Parameters
    ----------
    id : int
        Type identifier.
    name : str
        Display name (wire key ``nom``).
    """

    id: int
    name: str = Field(alias="nom")


class EquipmentModel(InventoryBaseModel):
    """An equipment model from the reference list.

    Parameters
    ----------
    id : int
        Model identifier.
    name : str
        Model designator (wire key ``nom``).
    type : str
        Name of the equipment type this model belongs to.
    """

    id: int
    name: str = Field(alias="nom")
    type: str


class Equipment(InventoryBaseModel):
    """A raw inventory record.

    ``model`` is a soft reference to an :class:`EquipmentModel` name; it is
    never checked against the reference list.

    Parameters
    ----------
    id : int
        Record identifier.
    name : str
        Record label (wire key ``nom``).
    model : str
        Model designator, the consolidation grouping key (wire key ``modele``).
    quantity : int
        Units held (wire key ``quantite``).
    status : str
        Free-form status (wire key ``statut``).
    """

    id: int
    name: str = Field(alias="nom")
    model: str = Field(alias="modele")
    quantity: int = Field(alias="quantite")
    status: str = Field(alias="statut")


class ConsolidatedEquipment(InventoryBaseModel):
    """One grouped line of the consolidated view."""

    model: str = Field(alias="modele")
    type: str
    quantity: int = Field(alias="quantite")
