"""
Item catalog: maps an incoming item name to the asset's display name and
metadata URI.

Entries are tested in order with a prefix match; the first match wins, so a
more specific prefix must be listed before a shorter one it extends.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field, model_validator

from .errors import UnknownItemError


class CatalogEntry(BaseModel):
    """One catalog item."""

    prefix: Optional[str] = Field(
        None, description="Item name prefix to match (defaults to name)"
    )
    name: str = Field(..., description="Display name written on-chain")
    uri: str = Field(..., description="Off-chain metadata JSON URI")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _default_prefix(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("prefix") is None:
            data = {**data, "prefix": data.get("name")}
        return data


@dataclass(frozen=True)
class ResolvedItem:
    """Name/URI pair selected for a mint."""

    name: str
    uri: str


class ItemCatalog:
    """Ordered, immutable prefix catalog.

    Incomplete entries (empty prefix, name or URI) are dropped.
    """

    def __init__(self, entries: Iterable[CatalogEntry]):
        self._entries: tuple[CatalogEntry, ...] = tuple(
            e for e in entries if e.prefix and e.name and e.uri
        )

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def resolve(self, item_name: str) -> ResolvedItem:
        """
        Resolve an item name to its name/URI pair.

        Raises:
            UnknownItemError: if no prefix matches
        """
        for entry in self._entries:
            if item_name.startswith(entry.prefix):
                return ResolvedItem(name=entry.name, uri=entry.uri)
        raise UnknownItemError("Unknown itemName provided.")
