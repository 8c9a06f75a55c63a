"""
Secret Societies Catalog

The immutable reference dataset the engine reads from:
- Zones and their borders
- Secret cards per zone
- Event cards
- Victory conditions

Lookups are by id. Unknown ids return None; callers decide whether
that is an error.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .definitions import SecretCard, EventCard, VictoryCondition, ZoneDefinition
from .zones import ZONES, STARTING_ZONES
from .cards import SECRET_CARDS
from .events import EVENT_CARDS
from .victory import VICTORY_CONDITIONS


@dataclass
class SecretSocietiesCatalog:
    """Indexed reference data for one ruleset."""
    zones: list[ZoneDefinition]
    cards: list[SecretCard]
    events: list[EventCard]
    victory_conditions: list[VictoryCondition]
    starting_zones: list[str] = field(default_factory=list)

    _cards_by_id: dict[str, SecretCard] = field(default_factory=dict, repr=False)
    _events_by_id: dict[str, EventCard] = field(default_factory=dict, repr=False)
    _vcs_by_id: dict[str, VictoryCondition] = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self._cards_by_id = {c.id: c for c in self.cards}
        self._events_by_id = {e.id: e for e in self.events}
        self._vcs_by_id = {vc.id: vc for vc in self.victory_conditions}
        if len(self._cards_by_id) != len(self.cards):
            raise ValueError("Duplicate secret card ids in catalog")
        if not self.starting_zones:
            self.starting_zones = [z.name for z in self.zones]

    def get_card(self, card_id: str) -> SecretCard | None:
        return self._cards_by_id.get(card_id)

    def get_event(self, event_id: str) -> EventCard | None:
        return self._events_by_id.get(event_id)

    def get_victory_condition(self, vc_id: str) -> VictoryCondition | None:
        return self._vcs_by_id.get(vc_id)

    def get_zone(self, name: str) -> ZoneDefinition | None:
        for zone in self.zones:
            if zone.name == name:
                return zone
        return None

    def cards_in_zone(self, zone_name: str) -> list[SecretCard]:
        return [c for c in self.cards if c.zone == zone_name]

    @property
    def zone_names(self) -> list[str]:
        return [z.name for z in self.zones]


def create_secret_societies_catalog() -> SecretSocietiesCatalog:
    """Create the standard Secret Societies catalog."""
    return SecretSocietiesCatalog(
        zones=list(ZONES),
        cards=list(SECRET_CARDS),
        events=list(EVENT_CARDS),
        victory_conditions=list(VICTORY_CONDITIONS),
        starting_zones=list(STARTING_ZONES),
    )
