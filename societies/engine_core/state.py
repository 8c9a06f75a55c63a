"""
Game State - The serializable snapshot of one Secret Societies session.

Design principles:
- One aggregate per session: players, zones, event slots, log
- Serializable: to_dict()/from_dict() round-trip through JSON
- The reducer is the only writer; the store only persists it
- Card references point into the catalog by base id
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from copy import deepcopy
from enum import Enum

from .errors import NotFoundError, ValidationError


MAX_LOG_ENTRIES = 50
MIN_PLAYERS = 2
MAX_PLAYERS = 4

RESOURCE_TYPES = ("gold", "trust", "information", "secrecy")


class TurnPhase(Enum):
    """Per-turn phases. Values are the wire names clients render."""
    VC_SELECTION = "VC_SELECTION"
    DRAW = "Draw"
    RETURN_EXPLOITS = "Return Exploits"
    EXPLOIT_SECRETS = "Exploit Secrets"
    REVEAL_SECRETS = "Reveal Secrets"
    END_OF_TURN = "End of Turn"


class SelectionStage(Enum):
    """Sub-state of VC_SELECTION."""
    LOBBY = "lobby"  # Players may join, host may start
    SELECTING = "selecting"  # Players pick victory conditions in turn order
    DONE = "done"  # Regular turns are running


class MaskType(Enum):
    """The four personal mask slots."""
    SOLAR = "solar"
    LUNAR = "lunar"
    SHADOW = "shadow"
    ECLIPSE = "eclipse"


@dataclass(frozen=True)
class CardRef:
    """
    A physical copy of a secret card.

    base_id keys into the catalog; instance_id is unique per copy.
    """
    base_id: str
    instance_id: str

    def to_dict(self) -> dict[str, str]:
        return {"base_id": self.base_id, "instance_id": self.instance_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CardRef:
        return cls(base_id=data["base_id"], instance_id=data["instance_id"])


@dataclass
class HandRevealRequest:
    """Identity of a player asking to see someone's hand."""
    player_id: str
    player_name: str


@dataclass
class RevealedHand:
    """Single-slot grant letting one player view another's hand."""
    for_player_id: str
    target_player_id: str
    target_player_name: str
    hand: list[CardRef] = field(default_factory=list)


@dataclass
class RevealedMask:
    """A mask currently pulsing on clients after being revealed."""
    player_id: str
    mask_type: MaskType
    revealed_by_player_id: str


def empty_masks() -> dict[MaskType, CardRef | None]:
    return {mask: None for mask in MaskType}


@dataclass
class PlayerState:
    """
    State for a single player.

    Resources never go below zero; adjust_resource clamps.
    """
    player_id: str
    name: str
    current_zone: str

    gold: int = 0
    trust: int = 0
    information: int = 0
    secrecy: int = 0

    hand: list[CardRef] = field(default_factory=list)
    masks: dict[MaskType, CardRef | None] = field(default_factory=empty_masks)

    victory_condition: str | None = None  # VC id, assigned once
    is_victory_condition_revealed: bool = False
    is_eliminated: bool = False
    pending_hand_reveal_request_from: HandRevealRequest | None = None

    def get_resource(self, resource: str) -> int:
        if resource not in RESOURCE_TYPES:
            raise ValidationError(f"Invalid resource type: {resource}")
        return getattr(self, resource)

    def adjust_resource(self, resource: str, amount: int) -> tuple[int, int]:
        """Add amount to a resource, clamped at zero. Returns (old, new)."""
        old = self.get_resource(resource)
        new = max(0, old + amount)
        setattr(self, resource, new)
        return old, new

    def hand_index(self, instance_id: str) -> int | None:
        """Position of a card instance in hand, or None."""
        for i, ref in enumerate(self.hand):
            if ref.instance_id == instance_id:
                return i
        return None

    def to_dict(self) -> dict[str, Any]:
        request = self.pending_hand_reveal_request_from
        return {
            "player_id": self.player_id,
            "name": self.name,
            "gold": self.gold,
            "trust": self.trust,
            "information": self.information,
            "secrecy": self.secrecy,
            "hand": [ref.to_dict() for ref in self.hand],
            "masks": {
                mask.value: (ref.to_dict() if ref else None)
                for mask, ref in self.masks.items()
            },
            "current_zone": self.current_zone,
            "victory_condition": self.victory_condition,
            "is_victory_condition_revealed": self.is_victory_condition_revealed,
            "is_eliminated": self.is_eliminated,
            "pending_hand_reveal_request_from": (
                {"player_id": request.player_id, "player_name": request.player_name}
                if request else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerState:
        masks = empty_masks()
        for key, ref in (data.get("masks") or {}).items():
            masks[MaskType(key)] = CardRef.from_dict(ref) if ref else None
        request = data.get("pending_hand_reveal_request_from")
        return cls(
            player_id=data["player_id"],
            name=data["name"],
            current_zone=data["current_zone"],
            gold=data.get("gold", 0),
            trust=data.get("trust", 0),
            information=data.get("information", 0),
            secrecy=data.get("secrecy", 0),
            hand=[CardRef.from_dict(ref) for ref in data.get("hand", [])],
            masks=masks,
            victory_condition=data.get("victory_condition"),
            is_victory_condition_revealed=data.get("is_victory_condition_revealed", False),
            is_eliminated=data.get("is_eliminated", False),
            pending_hand_reveal_request_from=(
                HandRevealRequest(request["player_id"], request["player_name"])
                if request else None
            ),
        )


@dataclass
class Zone:
    """
    A map location with its own secret deck.

    The front of secret_deck is the top (next drawn).
    """
    name: str
    borders: list[str] = field(default_factory=list)
    secret_deck: list[CardRef] = field(default_factory=list)

    def is_adjacent(self, other: str) -> bool:
        return other in self.borders

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "borders": list(self.borders),
            "secret_deck": [ref.to_dict() for ref in self.secret_deck],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Zone:
        return cls(
            name=data["name"],
            borders=list(data.get("borders", [])),
            secret_deck=[CardRef.from_dict(ref) for ref in data.get("secret_deck", [])],
        )


@dataclass
class GameState:
    """
    Complete state of one session at a point in time.

    players[0] is the host. Event and victory condition fields hold
    catalog ids; the API layer expands them for display.
    """
    session_id: str

    players: list[PlayerState] = field(default_factory=list)

    # Turn pointers
    current_player_id: str | None = None
    current_turn_player_index: int = 0
    vc_selection_player_index: int = 0
    round: int = 1
    turn_phase: TurnPhase = TurnPhase.VC_SELECTION
    selection_stage: SelectionStage = SelectionStage.LOBBY
    turn_order: list[str] = field(default_factory=list)
    has_moved_this_turn: bool = False

    # Shared counters
    suspicion: int = 0
    max_suspicion_adjustment: int = 2

    # Map
    zones: list[Zone] = field(default_factory=list)

    # Events and victory conditions (catalog ids)
    active_event: str | None = None
    upcoming_event: str | None = None
    event_deck: list[str] | None = None  # None means shuffle lazily on rotation
    available_victory_conditions: list[str] = field(default_factory=list)

    # Observable log, newest first
    game_log: list[str] = field(default_factory=list)

    # Transient presentation trackers
    revealed_hand: RevealedHand | None = None
    revealed_mask_types_this_turn: list[MaskType] = field(default_factory=list)
    currently_revealed_masks: list[RevealedMask] = field(default_factory=list)

    # Session metadata
    password: str | None = None
    created_at: str | None = None
    version: int = 0

    @property
    def host(self) -> PlayerState | None:
        return self.players[0] if self.players else None

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def current_player(self) -> PlayerState | None:
        return self.get_player(self.current_player_id) if self.current_player_id else None

    def is_host(self, player_id: str | None) -> bool:
        return bool(self.players) and self.players[0].player_id == player_id

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def require_player(self, player_id: str, message: str = "Player not found") -> PlayerState:
        player = self.get_player(player_id)
        if player is None:
            raise NotFoundError(message)
        return player

    def player_index(self, player_id: str) -> int:
        for i, p in enumerate(self.players):
            if p.player_id == player_id:
                return i
        return -1

    def get_zone(self, name: str) -> Zone | None:
        for zone in self.zones:
            if zone.name == name:
                return zone
        return None

    def add_log_entries(self, entries: list[str]):
        """
        Prepend a batch of entries, newest first, and cap the log.

        Entries arrive in the order they happened, so the last one
        ends up at the top.
        """
        if not entries:
            return
        self.game_log = (list(reversed(entries)) + self.game_log)[:MAX_LOG_ENTRIES]

    def card_locations(self) -> dict[str, list[str]]:
        """
        Map every card instance to the places it currently sits.

        A healthy state has exactly one location per instance.
        """
        locations: dict[str, list[str]] = {}
        for player in self.players:
            for ref in player.hand:
                locations.setdefault(ref.instance_id, []).append(f"hand:{player.player_id}")
            for mask, ref in player.masks.items():
                if ref:
                    locations.setdefault(ref.instance_id, []).append(
                        f"mask:{player.player_id}:{mask.value}"
                    )
        for zone in self.zones:
            for ref in zone.secret_deck:
                locations.setdefault(ref.instance_id, []).append(f"deck:{zone.name}")
        return locations

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        revealed = self.revealed_hand
        return {
            "session_id": self.session_id,
            "players": [p.to_dict() for p in self.players],
            "current_player_id": self.current_player_id,
            "current_turn_player_index": self.current_turn_player_index,
            "vc_selection_player_index": self.vc_selection_player_index,
            "round": self.round,
            "turn_phase": self.turn_phase.value,
            "selection_stage": self.selection_stage.value,
            "turn_order": list(self.turn_order),
            "has_moved_this_turn": self.has_moved_this_turn,
            "suspicion": self.suspicion,
            "max_suspicion_adjustment": self.max_suspicion_adjustment,
            "zones": [z.to_dict() for z in self.zones],
            "active_event": self.active_event,
            "upcoming_event": self.upcoming_event,
            "event_deck": list(self.event_deck) if self.event_deck is not None else None,
            "available_victory_conditions": list(self.available_victory_conditions),
            "game_log": list(self.game_log),
            "revealed_hand": (
                {
                    "for_player_id": revealed.for_player_id,
                    "target_player_id": revealed.target_player_id,
                    "target_player_name": revealed.target_player_name,
                    "hand": [ref.to_dict() for ref in revealed.hand],
                }
                if revealed else None
            ),
            "revealed_mask_types_this_turn": [m.value for m in self.revealed_mask_types_this_turn],
            "currently_revealed_masks": [
                {
                    "player_id": m.player_id,
                    "mask_type": m.mask_type.value,
                    "revealed_by_player_id": m.revealed_by_player_id,
                }
                for m in self.currently_revealed_masks
            ],
            "password": self.password,
            "created_at": self.created_at,
            "version": self.version,
        }

    def to_public_dict(self) -> dict[str, Any]:
        """Snapshot safe to send to clients."""
        data = self.to_dict()
        data.pop("password", None)
        data["has_password"] = self.password is not None
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameState:
        revealed = data.get("revealed_hand")
        event_deck = data.get("event_deck")
        return cls(
            session_id=data["session_id"],
            players=[PlayerState.from_dict(p) for p in data.get("players", [])],
            current_player_id=data.get("current_player_id"),
            current_turn_player_index=data.get("current_turn_player_index", 0),
            vc_selection_player_index=data.get("vc_selection_player_index", 0),
            round=data.get("round", 1),
            turn_phase=TurnPhase(data.get("turn_phase", TurnPhase.VC_SELECTION.value)),
            selection_stage=SelectionStage(
                data.get("selection_stage", SelectionStage.LOBBY.value)
            ),
            turn_order=list(data.get("turn_order", [])),
            has_moved_this_turn=data.get("has_moved_this_turn", False),
            suspicion=data.get("suspicion", 0),
            max_suspicion_adjustment=data.get("max_suspicion_adjustment", 2),
            zones=[Zone.from_dict(z) for z in data.get("zones", [])],
            active_event=data.get("active_event"),
            upcoming_event=data.get("upcoming_event"),
            event_deck=list(event_deck) if event_deck is not None else None,
            available_victory_conditions=list(data.get("available_victory_conditions", [])),
            game_log=list(data.get("game_log", [])),
            revealed_hand=(
                RevealedHand(
                    for_player_id=revealed["for_player_id"],
                    target_player_id=revealed["target_player_id"],
                    target_player_name=revealed["target_player_name"],
                    hand=[CardRef.from_dict(ref) for ref in revealed.get("hand", [])],
                )
                if revealed else None
            ),
            revealed_mask_types_this_turn=[
                MaskType(m) for m in data.get("revealed_mask_types_this_turn", [])
            ],
            currently_revealed_masks=[
                RevealedMask(
                    player_id=m["player_id"],
                    mask_type=MaskType(m["mask_type"]),
                    revealed_by_player_id=m["revealed_by_player_id"],
                )
                for m in data.get("currently_revealed_masks", [])
            ],
            password=data.get("password"),
            created_at=data.get("created_at"),
            version=data.get("version", 0),
        )
