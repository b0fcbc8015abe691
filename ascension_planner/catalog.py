"""Item name lookups for the Star Rail ``items.json`` dataset."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from .config import STARRAILRES_BASE


def cdn_url(relative_path: str | None) -> str | None:
    """Resolve an icon path such as ``icon/item/110001.png`` to a full URL."""

    if not relative_path:
        return None
    return f"{STARRAILRES_BASE}/{relative_path}"


class ItemCatalog:
    """Resolves item ids to display names and icons.

    ``items.json`` is keyed by the id as a string; lookups accept either form.
    """

    def __init__(self, data: Mapping[str, Mapping[str, Any]]) -> None:
        self._items: Dict[str, Mapping[str, Any]] = {str(key): value for key, value in data.items()}

    def __contains__(self, item_id: object) -> bool:
        return str(item_id) in self._items

    def item_name(self, item_id: int | str) -> str:
        item = self._items.get(str(item_id)) or {}
        return item.get("name") or f"Item {item_id}"

    def item_icon(self, item_id: int | str) -> str | None:
        item = self._items.get(str(item_id)) or {}
        return cdn_url(item.get("icon"))
