"""
Component Palette
Immutable registry of component keys to concrete tags, classes and imports.
"""

from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field

from ..core import get_logger
from ..core.errors import UnresolvedComponentKey

logger = get_logger(__name__)


class PaletteEntry(BaseModel):
    """A single component the mapper and generator may use."""

    model_config = ConfigDict(frozen=True)

    key: str
    lib: Literal["html", "shadcn", "lucide"] = "html"
    tag: str
    import_spec: str | None = None
    default_classes: str = ""
    default_props: Mapping[str, Any] = Field(default_factory=dict)
    match_hints: tuple[str, ...] = ()


class Palette:
    """
    Read-only lookup table of palette entries.

    Built once and passed to consumers; there is no mutation API.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[PaletteEntry]) -> None:
        table: dict[str, PaletteEntry] = {}
        for entry in entries:
            if entry.key in table:
                raise ValueError(f"Duplicate palette key: {entry.key}")
            table[entry.key] = entry
        self._entries: Mapping[str, PaletteEntry] = MappingProxyType(table)

    def lookup(self, key: str) -> PaletteEntry | None:
        return self._entries.get(key)

    def require(self, key: str) -> PaletteEntry:
        """
        Strict lookup.

        Raises:
            UnresolvedComponentKey: If the key is not in the palette
        """
        entry = self._entries.get(key)
        if entry is None:
            raise UnresolvedComponentKey(key)
        return entry

    def keys(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PaletteEntry]:
        return iter(self._entries.values())

    def describe(self, keys: Iterable[str] | None = None) -> list[dict[str, Any]]:
        """
        Compact catalog description sent to the design oracle.

        Args:
            keys: Restrict to these keys (unknown keys are ignored)
        """
        wanted = None if keys is None else set(keys)
        return [
            {"key": e.key, "tag": e.tag, "lib": e.lib, "hints": list(e.match_hints)}
            for e in self._entries.values()
            if wanted is None or e.key in wanted
        ]


@lru_cache
def default_palette() -> Palette:
    """Build the standard catalog (once per process)."""
    from .catalog import CATALOG

    palette = Palette(CATALOG)
    logger.info("palette_loaded", entries=len(palette))
    return palette
