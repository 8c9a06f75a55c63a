"""
Reference definitions for Secret Societies.

These are immutable catalog entries. Runtime state only ever stores
ids that point back here.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Rarity(Enum):
    COMMON = "Common"
    RARE = "Rare"
    EXOTIC = "Exotic"


DEFAULT_COPIES = {
    Rarity.COMMON: 3,
    Rarity.RARE: 2,
    Rarity.EXOTIC: 1,
}


@dataclass(frozen=True)
class SecretCard:
    """
    A secret card definition.

    Exploit effect applies while the card sits on a mask; reveal effect
    triggers once when the mask is revealed. Effect text is adjudicated
    by the players, not by the engine.
    """
    id: str
    name: str
    zone: str
    rarity: Rarity
    exploit_effect: str
    reveal_effect: str
    flavor: str = ""
    copies: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "zone": self.zone,
            "rarity": self.rarity.value,
            "exploit_effect": self.exploit_effect,
            "reveal_effect": self.reveal_effect,
            "flavor": self.flavor,
        }


@dataclass(frozen=True)
class EventCard:
    """A round event."""
    id: str
    name: str
    description: str


@dataclass(frozen=True)
class VictoryCondition:
    """A secret personal win condition. Declared by the host, never auto-checked."""
    id: str
    name: str
    description: str


@dataclass(frozen=True)
class ZoneDefinition:
    """A map location and the zones it borders."""
    name: str
    borders: tuple[str, ...] = field(default_factory=tuple)
