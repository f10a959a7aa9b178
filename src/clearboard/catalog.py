"""Registry of known raid and dungeon activity hashes."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

KNOWN_RAIDS: Mapping[int, str] = MappingProxyType(
    {
        2122313384: "Last Wish",
        3213556450: "Scourge of the Past",
        2693136600: "Garden of Salvation",
        1042180643: "Garden of Salvation",
        910380154: "Deep Stone Crypt",
        3881495763: "Vault of Glass",
        1441982566: "Vow of the Disciple",
        1374392663: "King's Fall",
        2381413764: "Root of Nightmares",
        107319834: "Crota's End",
        1541433876: "Salvation's Edge",
        1044919065: "The Desert Perpetual",
        3817322389: "The Desert Perpetual (Epic)",
    }
)

KNOWN_DUNGEONS: Mapping[int, str] = MappingProxyType(
    {
        2032534090: "The Shattered Throne",
        2582501063: "Pit of Heresy",
        1077850348: "Prophecy",
        4078656646: "Grasp of Avarice",
        2823159265: "Duality",
        1262462921: "Spire of the Watcher",
        313828469: "Ghosts of the Deep",
        300092127: "Vesper's Host",
        3834447244: "The Sundered Doctrine",
    }
)


@dataclass(frozen=True, slots=True)
class RaidEntry:
    """One logical raid and every hash that has been issued for it."""

    hash: int
    name: str
    all_hashes: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class DungeonEntry:
    hash: int
    name: str


class ActivityCatalog:
    """Read-only lookups over the raid and dungeon tables.

    Raids can be reissued under new hashes (or split by difficulty) while
    keeping the same display name, so the catalog also keeps a reverse index
    from raid name to every hash carrying it.
    """

    def __init__(
        self,
        raids: Mapping[int, str] = KNOWN_RAIDS,
        dungeons: Mapping[int, str] = KNOWN_DUNGEONS,
    ) -> None:
        self._raids: Mapping[int, str] = MappingProxyType(dict(raids))
        self._dungeons: Mapping[int, str] = MappingProxyType(dict(dungeons))
        self._raid_hashes_by_name = _build_reverse_index(self._raids)

    def raid_name(self, activity_hash: int) -> Optional[str]:
        return self._raids.get(activity_hash)

    def dungeon_name(self, activity_hash: int) -> Optional[str]:
        return self._dungeons.get(activity_hash)

    def display_name(self, activity_hash: int) -> Optional[str]:
        return self.raid_name(activity_hash) or self.dungeon_name(activity_hash)

    def is_raid(self, activity_hash: int) -> bool:
        return activity_hash in self._raids

    def is_dungeon(self, activity_hash: int) -> bool:
        return activity_hash in self._dungeons

    def hashes_sharing_raid_name(self, name: str) -> frozenset[int]:
        return self._raid_hashes_by_name.get(name, frozenset())

    def unique_raids(self) -> list[RaidEntry]:
        """Return one entry per raid name, in first-seen table order."""
        entries: dict[str, list[int]] = {}
        for activity_hash, name in self._raids.items():
            entries.setdefault(name, []).append(activity_hash)
        return [
            RaidEntry(hash=hashes[0], name=name, all_hashes=tuple(hashes))
            for name, hashes in entries.items()
        ]

    def unique_dungeons(self) -> list[DungeonEntry]:
        seen: dict[str, int] = {}
        for activity_hash, name in self._dungeons.items():
            seen.setdefault(name, activity_hash)
        return [DungeonEntry(hash=activity_hash, name=name) for name, activity_hash in seen.items()]

    def validate(self) -> None:
        """Raise ValueError if a raid or dungeon name is ambiguous."""
        names = list(self._dungeons.values())
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Dungeon names must be unique: {', '.join(duplicates)}")

        shared = sorted(set(self._raid_hashes_by_name) & set(names))
        if shared:
            raise ValueError(f"Names used for both a raid and a dungeon: {', '.join(shared)}")

        spellings: dict[str, str] = {}
        for name in self._raid_hashes_by_name:
            folded = " ".join(name.split()).casefold()
            other = spellings.setdefault(folded, name)
            if other != name:
                raise ValueError(
                    f"Raid names {other!r} and {name!r} differ only by case or spacing"
                )


def _build_reverse_index(raids: Mapping[int, str]) -> Mapping[str, frozenset[int]]:
    grouped: dict[str, set[int]] = {}
    for activity_hash, name in raids.items():
        grouped.setdefault(name, set()).add(activity_hash)
    return MappingProxyType({name: frozenset(hashes) for name, hashes in grouped.items()})


CATALOG = ActivityCatalog()
