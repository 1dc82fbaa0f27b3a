"""Assignment of NPCs to home zones."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from townsim.grid import Grid

log = logging.getLogger(__name__)

DEFAULT_HOMES = ("Home", "Home_2", "Home_3", "Home_4", "Home_5", "Home_6")


@dataclass(frozen=True)
class HomeAssignment:
    zone_name: str
    npc_id: int
    npc_name: str


@dataclass
class HomeManager:
    """Keeps a one-to-one mapping between NPCs and home zones."""

    available_homes: list[str] = field(default_factory=lambda: list(DEFAULT_HOMES))
    _npc_to_home: dict[int, str] = field(default_factory=dict, init=False, repr=False)
    _home_to_npc: dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def assign_home(self, npc_id: int, npc_name: str) -> bool:
        """Give the NPC the first free home; False if none is left."""
        if npc_id in self._npc_to_home:
            return True
        for home in self.available_homes:
            if home not in self._home_to_npc:
                self._npc_to_home[npc_id] = home
                self._home_to_npc[home] = npc_id
                log.info("Assigned %s (ID: %d) to %s", npc_name, npc_id, home)
                return True
        log.warning("No available homes for %s (ID: %d)", npc_name, npc_id)
        return False

    def npc_home(self, npc_id: int) -> str | None:
        """The NPC's home zone name, or None."""
        return self._npc_to_home.get(npc_id)

    def home_resident(self, home_name: str) -> int | None:
        """The id of the NPC living in a home, or None."""
        return self._home_to_npc.get(home_name)

    def all_assignments(self) -> list[HomeAssignment]:
        return [
            HomeAssignment(home, npc_id, f"NPC_{npc_id}")
            for npc_id, home in self._npc_to_home.items()
        ]

    def unassign_home(self, npc_id: int) -> None:
        """Free the NPC's home, if it has one."""
        home = self._npc_to_home.pop(npc_id, None)
        if home is not None:
            self._home_to_npc.pop(home, None)

    def npc_home_coordinates(self, npc_id: int, grid: Grid) -> tuple[int, int] | None:
        """Centre cell of the NPC's home zone, or None if unknown."""
        home = self.npc_home(npc_id)
        if home is None:
            return None
        zone = grid.zones.get(home)
        if zone is None:
            return None
        return zone.x + zone.width // 2, zone.y + zone.height // 2