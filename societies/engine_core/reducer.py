"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Works on a clone; the caller's state is never touched
- Validates before applying; a rejection writes nothing, not even the log
- Returns ActionResult with success/failure and the new log entries
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Callable

from .state import (
    GameState,
    PlayerState,
    CardRef,
    MaskType,
    TurnPhase,
    SelectionStage,
    HandRevealRequest,
    RevealedHand,
    RevealedMask,
    MIN_PLAYERS,
    MAX_PLAYERS,
)
from .action import (
    Action,
    ActionType,
    ActionResult,
    StartGameFromLobby,
    GetVcOffer,
    SelectVc,
    TerminateSession,
    ConcludeGame,
    AdjustPlayerResource,
    AdjustGlobalSuspicion,
    AdjustMaxSuspicionPerTurn,
    ManualDiscardCard,
    ManualDiscardFromMask,
    ManualReturnSecretFromMaskToHand,
    GiveSecretToPlayer,
    RequestHandReveal,
    RespondToHandReveal,
    AcknowledgeHandReveal,
    RevealVictoryCondition,
    RequestDrawOffer,
    ConfirmDraw,
    SkipDraw,
    ReturnExploits,
    ExploitSecret,
    FinishExploiting,
    RevealMask,
    FinishRevealing,
    MovePlayer,
    EndTurn,
)
from .errors import (
    ErrorKind,
    GameError,
    ValidationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    InternalError,
)

if TYPE_CHECKING:
    from ..games.secret_societies.catalog import SecretSocietiesCatalog

logger = logging.getLogger(__name__)

VC_OFFER_SIZE = 3
DRAW_OFFER_SIZE = 3
DRAW_COST_PER_EXTRA_CARD = 3


def draw_cost(card_count: int) -> int:
    """Gold cost of taking card_count cards from a draw offer. The first card is free."""
    return max(0, card_count - 1) * DRAW_COST_PER_EXTRA_CARD


def format_log_entry(message: str, when: datetime) -> str:
    """Game log line: local wall-clock time, then the message."""
    return f"[{when.strftime('%H:%M:%S')}] {message}"


class _LogBuffer:
    """Collects timestamped log entries for one action, in the order they happen."""

    def __init__(self, clock: Callable[[], datetime]):
        self._clock = clock
        self.entries: list[str] = []

    def add(self, message: str):
        self.entries.append(format_log_entry(message, self._clock()))


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The catalog provides card, event and victory condition definitions.
    rng and clock are injectable for deterministic tests.
    """
    catalog: SecretSocietiesCatalog
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], datetime] = datetime.now

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"Unknown action type: {action.action_type}",
                ErrorKind.VALIDATION_ERROR,
            )

        working = state.clone()
        log = _LogBuffer(self.clock)
        try:
            result = handler(working, action.payload, log)
        except GameError as e:
            logger.debug(
                "Action rejected",
                extra={
                    "session_id": state.session_id,
                    "action_type": action.action_type.value,
                    "error_kind": e.kind.value,
                },
            )
            return ActionResult.from_error(e)
        except Exception as e:
            logger.exception(
                "Unexpected error applying action",
                extra={"session_id": state.session_id, "action_type": action.action_type.value},
            )
            return ActionResult.failure(
                f"Failed to process game action: {e}",
                ErrorKind.INTERNAL_ERROR,
            )

        if result.state_changed:
            working.add_log_entries(log.entries)
            result.state_changes = list(log.entries)
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.START_GAME_FROM_LOBBY: self._handle_start_game,
            ActionType.GET_VC_OFFER: self._handle_get_vc_offer,
            ActionType.SELECT_VC: self._handle_select_vc,
            ActionType.TERMINATE_SESSION: self._handle_terminate_session,
            ActionType.CONCLUDE_GAME: self._handle_conclude_game,
            ActionType.ADJUST_PLAYER_RESOURCE: self._handle_adjust_player_resource,
            ActionType.ADJUST_GLOBAL_SUSPICION: self._handle_adjust_global_suspicion,
            ActionType.ADJUST_MAX_SUSPICION_PER_TURN: self._handle_adjust_max_suspicion,
            ActionType.MANUAL_DISCARD_CARD: self._handle_manual_discard_card,
            ActionType.MANUAL_DISCARD_FROM_MASK: self._handle_manual_discard_from_mask,
            ActionType.MANUAL_RETURN_SECRET_FROM_MASK_TO_HAND: self._handle_return_mask_to_hand,
            ActionType.GIVE_SECRET_TO_PLAYER: self._handle_give_secret,
            ActionType.REQUEST_HAND_REVEAL: self._handle_request_hand_reveal,
            ActionType.RESPOND_TO_HAND_REVEAL: self._handle_respond_to_hand_reveal,
            ActionType.ACKNOWLEDGE_HAND_REVEAL: self._handle_acknowledge_hand_reveal,
            ActionType.REVEAL_VICTORY_CONDITION: self._handle_reveal_victory_condition,
            ActionType.REQUEST_DRAW_OFFER: self._handle_request_draw_offer,
            ActionType.CONFIRM_DRAW: self._handle_confirm_draw,
            ActionType.SKIP_DRAW: self._handle_skip_draw,
            ActionType.RETURN_EXPLOITS: self._handle_return_exploits,
            ActionType.EXPLOIT_SECRET: self._handle_exploit_secret,
            ActionType.FINISH_EXPLOITING: self._handle_finish_exploiting,
            ActionType.REVEAL_MASK: self._handle_reveal_mask,
            ActionType.FINISH_REVEALING: self._handle_finish_revealing,
            ActionType.MOVE_PLAYER: self._handle_move_player,
            ActionType.END_TURN: self._handle_end_turn,
        }
        return handlers.get(action_type)

    # =========================================================================
    # Shared checks
    # =========================================================================

    def _require_turn(
        self,
        state: GameState,
        player_id: str,
        phase: TurnPhase,
        phase_error: str,
    ) -> PlayerState:
        """
        Gate for per-turn actions: player exists, it is their turn, phase matches.

        The turn check is skipped while victory conditions are being selected;
        the phase check rejects those calls instead.
        """
        player = state.require_player(player_id)
        if (
            state.selection_stage != SelectionStage.SELECTING
            and state.current_player_id != player.player_id
        ):
            raise AuthorizationError("Not your turn")
        if state.turn_phase != phase:
            raise AuthorizationError(phase_error)
        return player

    def _require_host(self, state: GameState, player_id: str, message: str) -> PlayerState:
        if not state.is_host(player_id):
            raise AuthorizationError(message)
        return state.players[0]

    def _card_name(self, ref: CardRef | None) -> str:
        card = self.catalog.get_card(ref.base_id) if ref else None
        return card.name if card else "card"

    def _discard_target(self, state: GameState, ref: CardRef, position: int | None):
        """Resolve the owning zone deck and the clamped insert index for a discard."""
        card = self.catalog.get_card(ref.base_id)
        if card is None:
            raise NotFoundError(f"Unknown secret card: {ref.base_id}")
        zone = state.get_zone(card.zone)
        if zone is None:
            raise NotFoundError(f"Zone not found: {card.zone}")
        deck_size = len(zone.secret_deck)
        index = deck_size if position is None else max(0, min(position, deck_size))
        return card, zone, index

    def _ok(self, state: GameState, **kwargs) -> ActionResult:
        return ActionResult.success_with_state(state, **kwargs)

    # =========================================================================
    # Lobby and victory condition selection
    # =========================================================================

    def _handle_start_game(self, state: GameState, p: StartGameFromLobby, log: _LogBuffer) -> ActionResult:
        host = self._require_host(state, p.player_id, "Only the host can start the game.")
        if not MIN_PLAYERS <= state.num_players <= MAX_PLAYERS:
            raise AuthorizationError(
                f"Game requires {MIN_PLAYERS}-{MAX_PLAYERS} players. "
                f"Currently {state.num_players}."
            )
        if (
            state.turn_phase != TurnPhase.VC_SELECTION
            or state.selection_stage != SelectionStage.LOBBY
        ):
            raise AuthorizationError("Game cannot be started from this phase or state.")

        turn_order = [player.player_id for player in state.players]
        self.rng.shuffle(turn_order)
        state.turn_order = turn_order
        state.current_player_id = turn_order[0]
        state.vc_selection_player_index = state.player_index(turn_order[0])
        state.selection_stage = SelectionStage.SELECTING
        state.revealed_mask_types_this_turn = []
        state.currently_revealed_masks = []

        names = ", ".join(state.get_player(pid).name for pid in turn_order)
        first = state.players[state.vc_selection_player_index]
        log.add(f"Game started by host {host.name} with {state.num_players} players.")
        log.add(f"Turn order: {names}.")
        log.add(f"{first.name} begins Victory Condition selection.")
        return self._ok(state)

    def _handle_get_vc_offer(self, state: GameState, p: GetVcOffer, log: _LogBuffer) -> ActionResult:
        """Offer up to three victory conditions. Out of turn this is an empty offer, not an error."""
        player = state.require_player(p.player_id)
        if (
            state.turn_phase != TurnPhase.VC_SELECTION
            or state.selection_stage != SelectionStage.SELECTING
            or state.current_player_id != player.player_id
        ):
            return self._ok(state, state_changed=False)

        pool = state.available_victory_conditions
        offered = self.rng.sample(pool, min(VC_OFFER_SIZE, len(pool)))
        offered_vcs = []
        for vc_id in offered:
            vc = self.catalog.get_victory_condition(vc_id)
            if vc:
                offered_vcs.append({"id": vc.id, "name": vc.name, "description": vc.description})
        return self._ok(state, data={"offered_vcs": offered_vcs}, state_changed=False)

    def _handle_select_vc(self, state: GameState, p: SelectVc, log: _LogBuffer) -> ActionResult:
        player = state.require_player(p.player_id, "Player not found for VC selection.")
        if (
            state.turn_phase != TurnPhase.VC_SELECTION
            or state.selection_stage != SelectionStage.SELECTING
        ):
            raise AuthorizationError("Not in VC Selection phase")
        if player.victory_condition is not None:
            raise ValidationError("Victory Condition already selected")
        if state.current_player_id != player.player_id:
            raise AuthorizationError("Not your turn to select a Victory Condition.")
        if (
            p.vc_id not in state.available_victory_conditions
            or self.catalog.get_victory_condition(p.vc_id) is None
        ):
            raise ValidationError("Invalid Victory Condition selected")

        player.victory_condition = p.vc_id
        state.available_victory_conditions = [
            vc_id for vc_id in state.available_victory_conditions if vc_id != p.vc_id
        ]
        log.add(f"{player.name} has selected their Victory Condition.")

        if all(pl.victory_condition is not None for pl in state.players):
            first_id = state.turn_order[0]
            state.turn_phase = TurnPhase.DRAW
            state.selection_stage = SelectionStage.DONE
            state.current_player_id = first_id
            state.current_turn_player_index = state.player_index(first_id)
            state.active_event = None
            state.has_moved_this_turn = False

            first = state.players[state.current_turn_player_index]
            log.add(
                "All players have selected Victory Conditions. Round 1 begins! "
                f"It is now {first.name}'s turn (Draw Phase)."
            )
            log.add("Round 1: No Active Event.")
            upcoming = self.catalog.get_event(state.upcoming_event) if state.upcoming_event else None
            if upcoming:
                log.add(f"Upcoming Event for Round 1: {upcoming.name}.")
            else:
                log.add("No Upcoming Event for Round 1.")
            return self._ok(state)

        if player.player_id not in state.turn_order:
            raise InternalError("Internal server error processing VC turn order.")
        order_index = state.turn_order.index(player.player_id)
        next_id = state.turn_order[(order_index + 1) % len(state.turn_order)]
        next_index = state.player_index(next_id)
        if next_index == -1:
            raise InternalError("Internal server error finding next VC selector.")

        state.current_player_id = next_id
        state.vc_selection_player_index = next_index
        log.add(f"Passing to {state.players[next_index].name} for VC selection.")
        return self._ok(state)

    # =========================================================================
    # Host actions
    # =========================================================================

    def _handle_terminate_session(self, state: GameState, p: TerminateSession, log: _LogBuffer) -> ActionResult:
        host = self._require_host(state, p.player_id, "Only the host can terminate the session.")
        log.add(f"Session {state.session_id} terminated by host {host.name}.")
        result = self._ok(state)
        result.delete_session = True
        return result

    def _handle_conclude_game(self, state: GameState, p: ConcludeGame, log: _LogBuffer) -> ActionResult:
        """
        Record the declared winner.

        The reducer only validates; the gateway increments the win count
        and deletes the session in one transaction.
        """
        host = self._require_host(state, p.host_player_id, "Only the host can conclude the game.")
        winner = state.require_player(p.winning_player_id, "Selected winning player not found.")
        log.add(f"Game concluded by host {host.name}. Winner: {winner.name}.")
        result = self._ok(state)
        result.delete_session = True
        result.winner_name = winner.name
        return result

    # =========================================================================
    # Table corrections
    # =========================================================================

    def _handle_adjust_player_resource(self, state: GameState, p: AdjustPlayerResource, log: _LogBuffer) -> ActionResult:
        player = state.require_player(p.player_id)
        old, new = player.adjust_resource(p.resource_type, p.amount)
        log.add(f"{player.name}'s {p.resource_type} changed by {p.amount}. Old: {old}, New: {new}.")
        return self._ok(state)

    def _handle_adjust_global_suspicion(self, state: GameState, p: AdjustGlobalSuspicion, log: _LogBuffer) -> ActionResult:
        old = state.suspicion
        state.suspicion = max(0, old + p.amount)
        log.add(f"Global suspicion adjusted by {p.amount}. Old: {old}, New: {state.suspicion}.")
        return self._ok(state)

    def _handle_adjust_max_suspicion(self, state: GameState, p: AdjustMaxSuspicionPerTurn, log: _LogBuffer) -> ActionResult:
        state.max_suspicion_adjustment = max(0, state.max_suspicion_adjustment + p.amount)
        log.add(
            f"Max suspicion adjustment per turn changed by {p.amount}. "
            f"New: {state.max_suspicion_adjustment}."
        )
        return self._ok(state)

    def _handle_manual_discard_card(self, state: GameState, p: ManualDiscardCard, log: _LogBuffer) -> ActionResult:
        player = state.require_player(p.player_id)
        hand_index = player.hand_index(p.card_instance_id)
        if hand_index is None:
            raise ValidationError("Card not found in hand.")
        ref = player.hand[hand_index]
        card, zone, position = self._discard_target(state, ref, p.return_to_position)

        player.hand.pop(hand_index)
        zone.secret_deck.insert(position, ref)
        log.add(f"{player.name} discarded {card.name}. Returned to {zone.name} deck at position {position}.")
        return self._ok(state)

    def _handle_manual_discard_from_mask(self, state: GameState, p: ManualDiscardFromMask, log: _LogBuffer) -> ActionResult:
        player = state.require_player(p.player_id)
        mask = p.mask_type_to_discard_from
        ref = player.masks[mask]
        if ref is None:
            raise ValidationError(f"Mask {mask.value} is empty.")
        card, zone, position = self._discard_target(state, ref, p.return_to_position)

        player.masks[mask] = None
        zone.secret_deck.insert(position, ref)
        log.add(
            f"{player.name} discarded {card.name} from {mask.value} mask. "
            f"Returned to {zone.name} deck at position {position}."
        )
        return self._ok(state)

    def _handle_return_mask_to_hand(self, state: GameState, p: ManualReturnSecretFromMaskToHand, log: _LogBuffer) -> ActionResult:
        player = state.require_player(p.player_id)
        ref = player.masks[p.mask_type]
        if ref is None:
            raise ValidationError(f"No secret on {p.mask_type.value} mask.")

        player.masks[p.mask_type] = None
        player.hand.append(ref)
        log.add(f"{player.name} returned {self._card_name(ref)} from {p.mask_type.value} mask to hand.")
        return self._ok(state)

    def _handle_give_secret(self, state: GameState, p: GiveSecretToPlayer, log: _LogBuffer) -> ActionResult:
        giver = state.require_player(p.giving_player_id, "Player not found.")
        receiver = state.require_player(p.receiving_player_id, "Player not found.")
        hand_index = giver.hand_index(p.card_instance_id)
        if hand_index is None:
            raise ValidationError("Card not found in hand.")

        ref = giver.hand.pop(hand_index)
        receiver.hand.append(ref)
        log.add(f"{giver.name} gave {self._card_name(ref)} to {receiver.name}.")
        return self._ok(state)

    # =========================================================================
    # Hand reveal consent protocol
    # =========================================================================

    def _handle_request_hand_reveal(self, state: GameState, p: RequestHandReveal, log: _LogBuffer) -> ActionResult:
        requester = state.require_player(p.requesting_player_id, "Player not found.")
        target = state.require_player(p.target_player_id, "Player not found.")
        if target.player_id == requester.player_id:
            raise ValidationError("Cannot request to see your own hand.")

        # Single slot: a newer request replaces an older one
        target.pending_hand_reveal_request_from = HandRevealRequest(
            player_id=requester.player_id,
            player_name=requester.name,
        )
        log.add(f"{requester.name} requested to see {target.name}'s hand.")
        return self._ok(state)

    def _handle_respond_to_hand_reveal(self, state: GameState, p: RespondToHandReveal, log: _LogBuffer) -> ActionResult:
        confirming = state.require_player(p.confirming_player_id, "Confirming player not found.")
        pending = confirming.pending_hand_reveal_request_from
        if pending is None or pending.player_id != p.requesting_player_id:
            raise ValidationError("No matching hand reveal request.")

        requester = state.get_player(p.requesting_player_id)
        requester_name = requester.name if requester else "Requesting Player"
        confirming.pending_hand_reveal_request_from = None
        if p.allowed:
            state.revealed_hand = RevealedHand(
                for_player_id=p.requesting_player_id,
                target_player_id=confirming.player_id,
                target_player_name=confirming.name,
                hand=list(confirming.hand),
            )
            log.add(f"{confirming.name} allowed hand reveal to {requester_name}.")
        else:
            log.add(f"{confirming.name} denied hand reveal to {requester_name}.")
        return self._ok(state)

    def _handle_acknowledge_hand_reveal(self, state: GameState, p: AcknowledgeHandReveal, log: _LogBuffer) -> ActionResult:
        revealed = state.revealed_hand
        if revealed is None or revealed.for_player_id != p.player_id:
            return self._ok(state, state_changed=False)

        state.revealed_hand = None
        player = state.get_player(p.player_id)
        log.add(f"{player.name if player else p.player_id} acknowledged revealed hand.")
        return self._ok(state)

    def _handle_reveal_victory_condition(self, state: GameState, p: RevealVictoryCondition, log: _LogBuffer) -> ActionResult:
        player = state.require_player(p.player_id)
        if player.victory_condition is None:
            raise ValidationError("No Victory Condition to reveal")
        if player.is_victory_condition_revealed:
            raise ValidationError("Victory Condition already revealed")

        player.is_victory_condition_revealed = True
        vc = self.catalog.get_victory_condition(player.victory_condition)
        log.add(
            f"{player.name} has revealed their Victory Condition: "
            f"{vc.name if vc else player.victory_condition}!"
        )
        return self._ok(state)

    # =========================================================================
    # Draw phase
    # =========================================================================

    def _handle_request_draw_offer(self, state: GameState, p: RequestDrawOffer, log: _LogBuffer) -> ActionResult:
        player = state.require_player(p.player_id)
        if state.turn_phase != TurnPhase.DRAW or state.current_player_id != player.player_id:
            raise AuthorizationError("Not your turn or not in Draw phase.")
        zone = state.get_zone(player.current_zone)
        if zone is None:
            raise InternalError("Player zone or deck data not found.")

        offered_cards = []
        for ref in zone.secret_deck[:DRAW_OFFER_SIZE]:
            card = self.catalog.get_card(ref.base_id)
            if card:
                offered_cards.append({**card.to_dict(), "instance_id": ref.instance_id})
        return self._ok(state, data={"offered_cards": offered_cards}, state_changed=False)

    def _handle_confirm_draw(self, state: GameState, p: ConfirmDraw, log: _LogBuffer) -> ActionResult:
        """
        Take cards from the top of the current zone's deck.

        The selection must still be within the deck's current top three;
        an offer made against an older snapshot is a conflict.
        """
        player = self._require_turn(state, p.player_id, TurnPhase.DRAW, "Not in Draw phase")

        taken_ids = [ref.instance_id for ref in p.cards_to_take]
        if len(set(taken_ids)) != len(taken_ids):
            raise ValidationError("Duplicate cards in draw selection.")
        cost = draw_cost(len(taken_ids))
        if p.cost is not None and p.cost != cost:
            raise ValidationError(f"Invalid draw cost {p.cost}. Expected {cost}.")
        if player.gold < cost:
            raise AuthorizationError("Not enough gold")

        zone = state.get_zone(player.current_zone)
        if zone is None:
            raise InternalError("Player zone or deck data not found.")
        offered = {ref.instance_id: ref for ref in zone.secret_deck[:DRAW_OFFER_SIZE]}
        if not all(instance_id in offered for instance_id in taken_ids):
            raise ConflictError("Invalid draw selection or deck state changed.")

        taken = [offered[instance_id] for instance_id in taken_ids]
        taken_set = set(taken_ids)
        zone.secret_deck = [ref for ref in zone.secret_deck if ref.instance_id not in taken_set]
        player.gold -= cost
        player.hand.extend(taken)
        state.turn_phase = TurnPhase.RETURN_EXPLOITS
        log.add(
            f"{player.name} drew {len(taken)} card(s) from {zone.name}. "
            f"Gold: {player.gold}. Now in Return Exploits."
        )
        return self._ok(state)

    def _handle_skip_draw(self, state: GameState, p: SkipDraw, log: _LogBuffer) -> ActionResult:
        player = self._require_turn(state, p.player_id, TurnPhase.DRAW, "Not in Draw phase")
        state.turn_phase = TurnPhase.RETURN_EXPLOITS
        log.add(f"{player.name} skipped drawing. Now in Return Exploits.")
        return self._ok(state)

    # =========================================================================
    # Exploit and reveal phases
    # =========================================================================

    def _handle_return_exploits(self, state: GameState, p: ReturnExploits, log: _LogBuffer) -> ActionResult:
        player = self._require_turn(
            state, p.player_id, TurnPhase.RETURN_EXPLOITS, "Not in Return Exploits phase"
        )
        for mask in MaskType:
            ref = player.masks[mask]
            if ref is not None:
                player.hand.append(ref)
                player.masks[mask] = None
        state.turn_phase = TurnPhase.EXPLOIT_SECRETS
        log.add(f"{player.name} returned exploited secrets. Now in Exploit Secrets.")
        return self._ok(state)

    def _handle_exploit_secret(self, state: GameState, p: ExploitSecret, log: _LogBuffer) -> ActionResult:
        player = self._require_turn(
            state, p.player_id, TurnPhase.EXPLOIT_SECRETS, "Not in Exploit Secrets phase"
        )
        hand_index = player.hand_index(p.card_to_exploit_ref.instance_id)
        if hand_index is None:
            raise ValidationError("Card not found in hand.")
        mask = p.target_mask_type
        if player.masks[mask] is not None:
            raise ValidationError(f"Mask {mask.value} is occupied.")

        ref = player.hand.pop(hand_index)
        player.masks[mask] = ref
        card = self.catalog.get_card(ref.base_id)
        log.add(
            f"{player.name} exploited {card.name if card else 'card'} onto {mask.value}. "
            f"Effect: {card.exploit_effect if card else ''}".rstrip()
        )
        return self._ok(state)

    def _handle_finish_exploiting(self, state: GameState, p: FinishExploiting, log: _LogBuffer) -> ActionResult:
        player = self._require_turn(
            state, p.player_id, TurnPhase.EXPLOIT_SECRETS, "Not in Exploit Secrets phase."
        )
        state.turn_phase = TurnPhase.REVEAL_SECRETS
        state.revealed_mask_types_this_turn = []
        state.currently_revealed_masks = []
        log.add(f"{player.name} finished exploiting. Now in Reveal Secrets.")
        return self._ok(state)

    def _handle_reveal_mask(self, state: GameState, p: RevealMask, log: _LogBuffer) -> ActionResult:
        """Reveal one of the player's masks. Revealing is free; eclipse is exempt."""
        player = self._require_turn(
            state, p.player_id, TurnPhase.REVEAL_SECRETS, "Not in Reveal Secrets phase."
        )
        mask = p.mask_to_reveal
        if mask == MaskType.ECLIPSE:
            raise ValidationError("Eclipse mask cannot be revealed.")

        if mask not in state.revealed_mask_types_this_turn:
            state.revealed_mask_types_this_turn.append(mask)
        pulse = RevealedMask(
            player_id=player.player_id,
            mask_type=mask,
            revealed_by_player_id=player.player_id,
        )
        if pulse not in state.currently_revealed_masks:
            state.currently_revealed_masks.append(pulse)

        ref = player.masks[mask]
        card = self.catalog.get_card(ref.base_id) if ref else None
        if card:
            log.add(f"{player.name} revealed {mask.value} mask. Secret: {card.name}. Effect: {card.reveal_effect}")
        else:
            log.add(f"{player.name} revealed {mask.value} mask. Empty mask revealed.")
        return self._ok(state)

    def _handle_finish_revealing(self, state: GameState, p: FinishRevealing, log: _LogBuffer) -> ActionResult:
        player = self._require_turn(
            state, p.player_id, TurnPhase.REVEAL_SECRETS, "Not in Reveal Secrets phase."
        )
        state.currently_revealed_masks = [
            m for m in state.currently_revealed_masks
            if m.revealed_by_player_id != player.player_id
        ]
        state.revealed_mask_types_this_turn = []
        state.turn_phase = TurnPhase.END_OF_TURN
        log.add(f"{player.name} finished revealing. Now in End of Turn.")
        return self._ok(state)

    # =========================================================================
    # End of turn
    # =========================================================================

    def _handle_move_player(self, state: GameState, p: MovePlayer, log: _LogBuffer) -> ActionResult:
        """Move to a bordering zone or stay put. Once per turn."""
        player = self._require_turn(
            state, p.player_id, TurnPhase.END_OF_TURN, "Not in End of Turn phase."
        )
        if state.has_moved_this_turn:
            raise AuthorizationError("You have already moved this turn.")
        zone = state.get_zone(player.current_zone)
        target = p.target_zone_name
        if zone is None or (target != zone.name and not zone.is_adjacent(target)):
            raise ValidationError(f"Cannot move to {target}.")

        player.current_zone = target
        state.has_moved_this_turn = True
        log.add(f"{player.name} moved to {target}.")
        return self._ok(state)

    def _handle_end_turn(self, state: GameState, p: EndTurn, log: _LogBuffer) -> ActionResult:
        """
        Pass the turn to the next player in turn order.

        Wrapping past the last player starts a new round and rotates events.
        """
        player = self._require_turn(
            state, p.player_id, TurnPhase.END_OF_TURN, "Not in End of Turn phase."
        )
        if player.player_id not in state.turn_order:
            raise InternalError("Current player is not in the turn order.")
        order_index = state.turn_order.index(player.player_id)
        next_order_index = (order_index + 1) % len(state.turn_order)
        next_id = state.turn_order[next_order_index]
        next_index = state.player_index(next_id)
        if next_index == -1:
            raise InternalError(f"Next player {next_id} not found.")

        log.add(f"{player.name} ends their turn.")
        state.currently_revealed_masks = [
            m for m in state.currently_revealed_masks
            if m.revealed_by_player_id != player.player_id
        ]
        state.revealed_mask_types_this_turn = []
        state.has_moved_this_turn = False

        state.current_player_id = next_id
        state.current_turn_player_index = next_index
        state.turn_phase = TurnPhase.DRAW

        if next_order_index == 0:
            state.round += 1
            log.add(f"Round {state.round} begins.")
            if state.round > 1:
                self._rotate_events(state, log)

        log.add(f"It is now {state.players[next_index].name}'s turn (Draw Phase).")
        return self._ok(state)

    def _rotate_events(self, state: GameState, log: _LogBuffer):
        """
        Outgoing active event goes to the bottom of the deck, upcoming becomes
        active, and a new upcoming event is drawn from the top.
        """
        if state.event_deck is None:
            in_play = {state.active_event, state.upcoming_event}
            deck = [e.id for e in self.catalog.events if e.id not in in_play]
            self.rng.shuffle(deck)
            state.event_deck = deck
        if state.active_event:
            state.event_deck.append(state.active_event)
        state.active_event = state.upcoming_event
        state.upcoming_event = state.event_deck.pop(0) if state.event_deck else None

        active = self.catalog.get_event(state.active_event) if state.active_event else None
        upcoming = self.catalog.get_event(state.upcoming_event) if state.upcoming_event else None
        if active:
            log.add(f"New Active Event for Round {state.round}: {active.name}.")
        else:
            log.add(f"No Active Event for Round {state.round}.")
        if upcoming:
            log.add(f"New Upcoming Event for Round {state.round}: {upcoming.name}.")
        else:
            log.add(f"No Upcoming Event for Round {state.round}.")


def apply_action(catalog: SecretSocietiesCatalog, state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(catalog=catalog)
    return reducer.apply(state, action)
