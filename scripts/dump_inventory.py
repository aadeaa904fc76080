#!/usr/bin/env python3
"""Load the inventory API into a store and print the consolidated view.

Usage
-----
Set environment variables and run::

    export EQUIPSTORE_API_BASE_URL="https://inventaire.example/api"
    export EQUIPSTORE_STORAGE_DIR="$HOME/.equipstore"   # optional
    python scripts/dump_inventory.py

Options::

    --json               Output as machine-readable JSON
    --offline            Skip the API and print the stored snapshot only
    --debug              Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import aiohttp

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from equipstore import EquipmentStore, StoreConfig  # noqa: E402
from equipstore.loader import (  # noqa: E402
    HttpEquipmentSource,
    load_equipment_models,
    load_equipment_types,
    load_equipments,
)
from equipstore.state.selectors import page_count, total_quantity  # noqa: E402


def _section(title: str) -> str:
    return f"\n{'=' * 60}\n  {title}\n{'=' * 60}"


async def main() -> int:
    parser = argparse.ArgumentParser(description="Dump the consolidated equipment inventory")
    parser.add_argument("--json", dest="json_mode", action="store_true")
    parser.add_argument("--offline", action="store_true")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    config = StoreConfig.from_env()
    store = EquipmentStore.from_config(config)

    if not args.offline:
        async with aiohttp.ClientSession() as http:
            source = HttpEquipmentSource(config.api_base_url, http)
            for load in (load_equipment_types, load_equipment_models, load_equipments):
                if not await load(store, source):
                    print(f"Load failed: {store.state.error}", file=sys.stderr)
                    return 1
        store.consolidate_equipments()
        store.set_total_pages(page_count(len(store.state.consolidated_equipments), store.state.items_per_page))

    state = store.state
    if args.json_mode:
        print(json.dumps(state.to_persisted(), indent=2, ensure_ascii=False))
        return 0

    out: list[str] = [_section("equipstore dump_inventory")]
    out.append(f"  types     : {len(state.equipment_types)}")
    out.append(f"  models    : {len(state.equipment_models)}")
    out.append(f"  records   : {len(state.equipments)} ({total_quantity(state.equipments)} units)")
    out.append(f"  modified  : {state.is_consolidation_modified}")
    out.append(f"  pages     : {state.total_pages} x {state.items_per_page}")
    out.append(_section("CONSOLIDATED"))
    for entry in state.consolidated_equipments:
        out.append(f"  {entry.model:<40} {entry.type:<22} {entry.quantity:>6}")
    print("\n".join(out))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
