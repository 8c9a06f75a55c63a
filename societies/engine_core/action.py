"""
Action System - Actions, payloads, and results.

Actions represent:
1. Lobby and victory condition selection (start, offer, select)
2. Turn phase actions (draw, exploit, reveal, move, end turn)
3. Table corrections (resource adjustments, manual discards, gifts)
4. Host actions (conclude, terminate)

Every action type has its own payload dataclass. parse_action() turns a
raw {"type", "payload"} request into a typed Action, accepting either
camelCase or snake_case payload keys.
"""

from __future__ import annotations
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union

from .errors import ErrorKind, GameError, ValidationError
from .state import CardRef, MaskType, RESOURCE_TYPES


class ActionType(Enum):
    """Types of actions. Values are the wire names."""
    # Lobby and VC selection
    START_GAME_FROM_LOBBY = "START_GAME_FROM_LOBBY"
    GET_VC_OFFER = "GET_VC_OFFER"
    SELECT_VC = "SELECT_VC"

    # Host actions
    TERMINATE_SESSION = "TERMINATE_SESSION"
    CONCLUDE_GAME = "CONCLUDE_GAME"

    # Table corrections
    ADJUST_PLAYER_RESOURCE = "ADJUST_PLAYER_RESOURCE"
    ADJUST_GLOBAL_SUSPICION = "ADJUST_GLOBAL_SUSPICION"
    ADJUST_MAX_SUSPICION_PER_TURN = "ADJUST_MAX_SUSPICION_PER_TURN"
    MANUAL_DISCARD_CARD = "MANUAL_DISCARD_CARD"
    MANUAL_DISCARD_FROM_MASK = "MANUAL_DISCARD_FROM_MASK"
    MANUAL_RETURN_SECRET_FROM_MASK_TO_HAND = "MANUAL_RETURN_SECRET_FROM_MASK_TO_HAND"
    GIVE_SECRET_TO_PLAYER = "GIVE_SECRET_TO_PLAYER"

    # Hand reveal consent protocol
    REQUEST_HAND_REVEAL = "REQUEST_HAND_REVEAL"
    RESPOND_TO_HAND_REVEAL = "RESPOND_TO_HAND_REVEAL"
    ACKNOWLEDGE_HAND_REVEAL = "ACKNOWLEDGE_HAND_REVEAL"
    REVEAL_VICTORY_CONDITION = "REVEAL_VICTORY_CONDITION"

    # Turn phases
    REQUEST_DRAW_OFFER = "REQUEST_DRAW_OFFER"
    CONFIRM_DRAW = "CONFIRM_DRAW"
    SKIP_DRAW = "SKIP_DRAW"
    RETURN_EXPLOITS = "RETURN_EXPLOITS"
    EXPLOIT_SECRET = "EXPLOIT_SECRET"
    FINISH_EXPLOITING = "FINISH_EXPLOITING"
    REVEAL_MASK = "REVEAL_MASK"
    FINISH_REVEALING = "FINISH_REVEALING"
    MOVE_PLAYER = "MOVE_PLAYER"
    END_TURN = "END_TURN"


# =============================================================================
# Payloads
# =============================================================================

@dataclass
class StartGameFromLobby:
    player_id: str


@dataclass
class GetVcOffer:
    player_id: str


@dataclass
class SelectVc:
    player_id: str
    vc_id: str


@dataclass
class TerminateSession:
    player_id: str


@dataclass
class ConcludeGame:
    host_player_id: str
    winning_player_id: str


@dataclass
class AdjustPlayerResource:
    player_id: str
    resource_type: str  # gold, trust, information, secrecy
    amount: int


@dataclass
class AdjustGlobalSuspicion:
    amount: int
    player_id: str | None = None


@dataclass
class AdjustMaxSuspicionPerTurn:
    amount: int
    player_id: str | None = None


@dataclass
class ManualDiscardCard:
    """Return a card from hand to its zone deck. Position defaults to the bottom."""
    player_id: str
    card_instance_id: str
    return_to_position: int | None = None


@dataclass
class ManualDiscardFromMask:
    player_id: str
    mask_type_to_discard_from: MaskType
    return_to_position: int | None = None


@dataclass
class ManualReturnSecretFromMaskToHand:
    player_id: str
    mask_type: MaskType


@dataclass
class GiveSecretToPlayer:
    giving_player_id: str
    receiving_player_id: str
    card_instance_id: str


@dataclass
class RequestHandReveal:
    requesting_player_id: str
    target_player_id: str


@dataclass
class RespondToHandReveal:
    confirming_player_id: str
    requesting_player_id: str
    allowed: bool


@dataclass
class AcknowledgeHandReveal:
    player_id: str


@dataclass
class RevealVictoryCondition:
    player_id: str


@dataclass
class RequestDrawOffer:
    player_id: str


@dataclass
class ConfirmDraw:
    """
    Take a subset of the offered cards.

    cost is optional; when sent it must match the server-side price.
    """
    player_id: str
    cards_to_take: list[CardRef]
    cost: int | None = None


@dataclass
class SkipDraw:
    player_id: str


@dataclass
class ReturnExploits:
    player_id: str


@dataclass
class ExploitSecret:
    player_id: str
    card_to_exploit_ref: CardRef
    target_mask_type: MaskType


@dataclass
class FinishExploiting:
    player_id: str


@dataclass
class RevealMask:
    player_id: str
    mask_to_reveal: MaskType


@dataclass
class FinishRevealing:
    player_id: str


@dataclass
class MovePlayer:
    player_id: str
    target_zone_name: str


@dataclass
class EndTurn:
    player_id: str


ActionPayload = Union[
    StartGameFromLobby, GetVcOffer, SelectVc, TerminateSession, ConcludeGame,
    AdjustPlayerResource, AdjustGlobalSuspicion, AdjustMaxSuspicionPerTurn,
    ManualDiscardCard, ManualDiscardFromMask, ManualReturnSecretFromMaskToHand,
    GiveSecretToPlayer, RequestHandReveal, RespondToHandReveal, AcknowledgeHandReveal,
    RevealVictoryCondition, RequestDrawOffer, ConfirmDraw, SkipDraw, ReturnExploits,
    ExploitSecret, FinishExploiting, RevealMask, FinishRevealing, MovePlayer, EndTurn,
]

PAYLOAD_TYPES: dict[ActionType, type] = {
    ActionType.START_GAME_FROM_LOBBY: StartGameFromLobby,
    ActionType.GET_VC_OFFER: GetVcOffer,
    ActionType.SELECT_VC: SelectVc,
    ActionType.TERMINATE_SESSION: TerminateSession,
    ActionType.CONCLUDE_GAME: ConcludeGame,
    ActionType.ADJUST_PLAYER_RESOURCE: AdjustPlayerResource,
    ActionType.ADJUST_GLOBAL_SUSPICION: AdjustGlobalSuspicion,
    ActionType.ADJUST_MAX_SUSPICION_PER_TURN: AdjustMaxSuspicionPerTurn,
    ActionType.MANUAL_DISCARD_CARD: ManualDiscardCard,
    ActionType.MANUAL_DISCARD_FROM_MASK: ManualDiscardFromMask,
    ActionType.MANUAL_RETURN_SECRET_FROM_MASK_TO_HAND: ManualReturnSecretFromMaskToHand,
    ActionType.GIVE_SECRET_TO_PLAYER: GiveSecretToPlayer,
    ActionType.REQUEST_HAND_REVEAL: RequestHandReveal,
    ActionType.RESPOND_TO_HAND_REVEAL: RespondToHandReveal,
    ActionType.ACKNOWLEDGE_HAND_REVEAL: AcknowledgeHandReveal,
    ActionType.REVEAL_VICTORY_CONDITION: RevealVictoryCondition,
    ActionType.REQUEST_DRAW_OFFER: RequestDrawOffer,
    ActionType.CONFIRM_DRAW: ConfirmDraw,
    ActionType.SKIP_DRAW: SkipDraw,
    ActionType.RETURN_EXPLOITS: ReturnExploits,
    ActionType.EXPLOIT_SECRET: ExploitSecret,
    ActionType.FINISH_EXPLOITING: FinishExploiting,
    ActionType.REVEAL_MASK: RevealMask,
    ActionType.FINISH_REVEALING: FinishRevealing,
    ActionType.MOVE_PLAYER: MovePlayer,
    ActionType.END_TURN: EndTurn,
}

_ACTION_TYPE_BY_PAYLOAD = {cls: action_type for action_type, cls in PAYLOAD_TYPES.items()}


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload
    action_id: str | None = None

    @classmethod
    def of(cls, payload: ActionPayload, action_id: str | None = None) -> Action:
        """Build an action from its payload; the type follows from the payload class."""
        return cls(
            action_type=_ACTION_TYPE_BY_PAYLOAD[type(payload)],
            payload=payload,
            action_id=action_id,
        )

    @property
    def actor_id(self) -> str | None:
        """The player id the action is attributed to, for logging."""
        for name in ("player_id", "host_player_id", "giving_player_id",
                     "requesting_player_id", "confirming_player_id"):
            value = getattr(self.payload, name, None)
            if value:
                return value
        return None


# =============================================================================
# Parsing
# =============================================================================

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


class _PayloadReader:
    """Typed access to a raw payload dict with camelCase keys normalized."""

    def __init__(self, raw: dict[str, Any]):
        self.raw = {_snake(k): v for k, v in raw.items()}

    def text(self, name: str) -> str:
        value = self.raw.get(name)
        if not isinstance(value, str) or not value:
            raise ValidationError(f"Missing or invalid field: {name}")
        return value

    def opt_text(self, name: str) -> str | None:
        value = self.raw.get(name)
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValidationError(f"Invalid field: {name}")
        return value

    def amount(self, name: str = "amount") -> int:
        value = self.raw.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError("Invalid amount provided. Must be a number.")
        if isinstance(value, float):
            if not math.isfinite(value) or not value.is_integer():
                raise ValidationError("Invalid amount provided. Must be a whole number.")
            value = int(value)
        return value

    def opt_int(self, name: str) -> int | None:
        value = self.raw.get(name)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"Invalid field: {name} must be an integer")
        return value

    def flag(self, name: str) -> bool:
        value = self.raw.get(name)
        if not isinstance(value, bool):
            raise ValidationError(f"Missing or invalid field: {name}")
        return value

    def mask(self, name: str) -> MaskType:
        value = self.raw.get(name)
        try:
            return MaskType(value)
        except ValueError:
            raise ValidationError(f"Invalid mask type: {value}")

    def resource(self, name: str) -> str:
        value = self.text(name)
        if value not in RESOURCE_TYPES:
            raise ValidationError(f"Invalid resource type: {value}")
        return value

    def card_ref(self, name: str) -> CardRef:
        return _parse_card_ref(self.raw.get(name), name)

    def card_refs(self, name: str) -> list[CardRef]:
        value = self.raw.get(name)
        if not isinstance(value, list):
            raise ValidationError(f"Missing or invalid field: {name}")
        return [_parse_card_ref(item, name) for item in value]


def _parse_card_ref(value: Any, name: str) -> CardRef:
    """Accept {id, instanceId} as well as {base_id, instance_id}."""
    if not isinstance(value, dict):
        raise ValidationError(f"Missing or invalid card reference: {name}")
    data = {_snake(k): v for k, v in value.items()}
    base_id = data.get("base_id", data.get("id"))
    instance_id = data.get("instance_id")
    if not isinstance(base_id, str) or not isinstance(instance_id, str):
        raise ValidationError(f"Missing or invalid card reference: {name}")
    return CardRef(base_id=base_id, instance_id=instance_id)


_BUILDERS: dict[ActionType, Callable[[_PayloadReader], Any]] = {
    ActionType.START_GAME_FROM_LOBBY: lambda r: StartGameFromLobby(r.text("player_id")),
    ActionType.GET_VC_OFFER: lambda r: GetVcOffer(r.text("player_id")),
    ActionType.SELECT_VC: lambda r: SelectVc(r.text("player_id"), r.text("vc_id")),
    ActionType.TERMINATE_SESSION: lambda r: TerminateSession(r.text("player_id")),
    ActionType.CONCLUDE_GAME: lambda r: ConcludeGame(
        r.text("host_player_id"), r.text("winning_player_id"),
    ),
    ActionType.ADJUST_PLAYER_RESOURCE: lambda r: AdjustPlayerResource(
        r.text("player_id"), r.resource("resource_type"), r.amount(),
    ),
    ActionType.ADJUST_GLOBAL_SUSPICION: lambda r: AdjustGlobalSuspicion(
        r.amount(), r.opt_text("player_id"),
    ),
    ActionType.ADJUST_MAX_SUSPICION_PER_TURN: lambda r: AdjustMaxSuspicionPerTurn(
        r.amount(), r.opt_text("player_id"),
    ),
    ActionType.MANUAL_DISCARD_CARD: lambda r: ManualDiscardCard(
        r.text("player_id"), r.text("card_instance_id"), r.opt_int("return_to_position"),
    ),
    ActionType.MANUAL_DISCARD_FROM_MASK: lambda r: ManualDiscardFromMask(
        r.text("player_id"), r.mask("mask_type_to_discard_from"), r.opt_int("return_to_position"),
    ),
    ActionType.MANUAL_RETURN_SECRET_FROM_MASK_TO_HAND: lambda r: ManualReturnSecretFromMaskToHand(
        r.text("player_id"), r.mask("mask_type"),
    ),
    ActionType.GIVE_SECRET_TO_PLAYER: lambda r: GiveSecretToPlayer(
        r.text("giving_player_id"), r.text("receiving_player_id"), r.text("card_instance_id"),
    ),
    ActionType.REQUEST_HAND_REVEAL: lambda r: RequestHandReveal(
        r.text("requesting_player_id"), r.text("target_player_id"),
    ),
    ActionType.RESPOND_TO_HAND_REVEAL: lambda r: RespondToHandReveal(
        r.text("confirming_player_id"), r.text("requesting_player_id"), r.flag("allowed"),
    ),
    ActionType.ACKNOWLEDGE_HAND_REVEAL: lambda r: AcknowledgeHandReveal(r.text("player_id")),
    ActionType.REVEAL_VICTORY_CONDITION: lambda r: RevealVictoryCondition(r.text("player_id")),
    ActionType.REQUEST_DRAW_OFFER: lambda r: RequestDrawOffer(r.text("player_id")),
    ActionType.CONFIRM_DRAW: lambda r: ConfirmDraw(
        r.text("player_id"),
        r.card_refs("cards_to_take"),
        r.amount("cost") if r.raw.get("cost") is not None else None,
    ),
    ActionType.SKIP_DRAW: lambda r: SkipDraw(r.text("player_id")),
    ActionType.RETURN_EXPLOITS: lambda r: ReturnExploits(r.text("player_id")),
    ActionType.EXPLOIT_SECRET: lambda r: ExploitSecret(
        r.text("player_id"), r.card_ref("card_to_exploit_ref"), r.mask("target_mask_type"),
    ),
    ActionType.FINISH_EXPLOITING: lambda r: FinishExploiting(r.text("player_id")),
    ActionType.REVEAL_MASK: lambda r: RevealMask(r.text("player_id"), r.mask("mask_to_reveal")),
    ActionType.FINISH_REVEALING: lambda r: FinishRevealing(r.text("player_id")),
    ActionType.MOVE_PLAYER: lambda r: MovePlayer(r.text("player_id"), r.text("target_zone_name")),
    ActionType.END_TURN: lambda r: EndTurn(r.text("player_id")),
}


def parse_action(data: dict[str, Any]) -> Action:
    """
    Parse a raw action request into a typed Action.

    Args:
        data: Dictionary with "type" and "payload" keys

    Returns:
        Typed Action

    Raises:
        ValidationError: If type is unknown or payload fields are missing/malformed
    """
    if not isinstance(data, dict):
        raise ValidationError("Action type and payload are required")
    raw_type = data.get("type")
    payload = data.get("payload")
    if not raw_type or not isinstance(payload, dict):
        raise ValidationError("Action type and payload are required")

    try:
        action_type = ActionType(raw_type)
    except ValueError:
        raise ValidationError(f"Unknown action type: {raw_type}")

    builder = _BUILDERS[action_type]
    return Action(
        action_type=action_type,
        payload=builder(_PayloadReader(payload)),
        action_id=data.get("action_id"),
    )


# =============================================================================
# Results
# =============================================================================

@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error and its kind (if failed)
    - Log entries written by the action
    - Read-only data (offers) and session-level flags for the gateway
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_kind: ErrorKind | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)  # Log entries, in order
    data: dict[str, Any] = field(default_factory=dict)  # Offers for read-only actions

    # For the session gateway
    state_changed: bool = True  # False for read-only actions
    delete_session: bool = False
    winner_name: str | None = None

    @property
    def http_status(self) -> int:
        if self.success:
            return 200
        return (self.error_kind or ErrorKind.INTERNAL_ERROR).http_status

    @classmethod
    def failure(cls, error: str, error_kind: ErrorKind = ErrorKind.VALIDATION_ERROR) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_kind=error_kind, state_changed=False)

    @classmethod
    def from_error(cls, exc: GameError) -> ActionResult:
        return cls.failure(exc.message, exc.kind)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        data: dict[str, Any] | None = None,
        state_changed: bool = True,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            data=data or {},
            state_changed=state_changed,
        )
