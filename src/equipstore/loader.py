"""Data-source collaborator: fetch reference lists and feed them to the store.

The store never talks to the network. Load helpers here follow the load
contract: flag ``is_loading`` before the request, apply the result on
success, record ``error`` on failure, and clear ``is_loading`` once
settled.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, TypeVar

import aiohttp
from pydantic import TypeAdapter, ValidationError

from equipstore.exceptions import EquipmentSourceError
from equipstore.models import Equipment, EquipmentModel, EquipmentType
from equipstore.state.store import EquipmentStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")

_TYPES_ADAPTER = TypeAdapter(list[EquipmentType])
_MODELS_ADAPTER = TypeAdapter(list[EquipmentModel])
_EQUIPMENTS_ADAPTER = TypeAdapter(list[Equipment])


class EquipmentSource(Protocol):
    """Structural data-source interface used by the load helpers.

    Implementations raise :class:`EquipmentSourceError` on failure.
    """

    async def fetch_types(self) -> Sequence[EquipmentType]:
        ...

    async def fetch_models(self) -> Sequence[EquipmentModel]:
        ...

    async def fetch_equipments(self) -> Sequence[Equipment]:
        ...


class HttpEquipmentSource:
    """Inventory API client over an existing ``aiohttp.ClientSession``.

    Each endpoint answers ``GET`` with a JSON array of records keyed by
    wire names (``nom``, ``modele``, ``quantite``...).
    """

    TYPES_ENDPOINT = "/types"
    MODELS_ENDPOINT = "/models"
    EQUIPMENTS_ENDPOINT = "/equipments"

    def __init__(self, base_url: str, http_session: aiohttp.ClientSession) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_session

    async def _get_json(self, endpoint: str) -> Any:
        url = f"{self._base_url}{endpoint}"
        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, headers={"accept": "application/json"}) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise EquipmentSourceError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except EquipmentSourceError:
            raise
        except aiohttp.ClientError as exc:
            raise EquipmentSourceError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise EquipmentSourceError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

    async def _fetch_list(self, endpoint: str, adapter: TypeAdapter[list[T]]) -> list[T]:
        body = await self._get_json(endpoint)
        try:
            return adapter.validate_python(body)
        except ValidationError as exc:
            raise EquipmentSourceError(
                f"Unexpected payload from {endpoint}: {exc.error_count()} invalid field(s)",
                endpoint=endpoint,
            ) from exc

    async def fetch_types(self) -> list[EquipmentType]:
        return await self._fetch_list(self.TYPES_ENDPOINT, _TYPES_ADAPTER)

    async def fetch_models(self) -> list[EquipmentModel]:
        return await self._fetch_list(self.MODELS_ENDPOINT, _MODELS_ADAPTER)

    async def fetch_equipments(self) -> list[Equipment]:
        return await self._fetch_list(self.EQUIPMENTS_ENDPOINT, _EQUIPMENTS_ADAPTER)


async def _run_load(
    store: EquipmentStore,
    fetch: Callable[[], Awaitable[Sequence[T]]],
    apply: Callable[[Sequence[T]], None],
    what: str,
) -> bool:
    store.set_loading(True)
    store.set_error(None)
    try:
        result = await fetch()
    except EquipmentSourceError as exc:
        _logger.debug("Loading %s failed", what, exc_info=True)
        store.set_error(str(exc))
        return False
    else:
        apply(result)
        _logger.debug("Loaded %d %s", len(result), what)
        return True
    finally:
        store.set_loading(False)


async def load_equipment_types(store: EquipmentStore, source: EquipmentSource) -> bool:
    """Fetch types into ``store.equipment_types``; ``False`` when the fetch failed."""
    return await _run_load(store, source.fetch_types, store.set_equipment_types, "equipment types")


async def load_equipment_models(store: EquipmentStore, source: EquipmentSource) -> bool:
    return await _run_load(store, source.fetch_models, store.set_equipment_models, "equipment models")


async def load_equipments(store: EquipmentStore, source: EquipmentSource) -> bool:
    return await _run_load(store, source.fetch_equipments, store.set_equipments, "equipments")
