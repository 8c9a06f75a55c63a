"""
Tests for the reducer (state transitions).

Tests:
- Lobby start and victory condition selection
- Turn phases: draw, exploit, reveal, move, end turn
- Round and event rotation
- Table corrections and hand reveals
- Host actions
- Validation and error kinds
"""

import pytest

from ..engine_core.errors import ErrorKind
from ..engine_core.state import (
    GameState,
    MaskType,
    TurnPhase,
    SelectionStage,
    MAX_LOG_ENTRIES,
)
from ..engine_core.action import (
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
from ..engine_core.reducer import apply_action, draw_cost
from ..engine_core.action import Action


STAMP = "[12:00:00] "


def other_player_id(state: GameState, player_id: str) -> str:
    return next(p.player_id for p in state.players if p.player_id != player_id)


def top_cards(state: GameState, player_id: str, count: int = 3):
    player = state.get_player(player_id)
    return state.get_zone(player.current_zone).secret_deck[:count]


@pytest.fixture
def exploit_state(draw_state, advance) -> GameState:
    """Current player drew two cards and is in Exploit Secrets."""
    pid = draw_state.current_player_id
    state = advance(draw_state, ConfirmDraw(pid, top_cards(draw_state, pid, 2)))
    return advance(state, ReturnExploits(pid))


@pytest.fixture
def end_of_turn_state(draw_state, advance) -> GameState:
    """Current player skipped through to End of Turn."""
    pid = draw_state.current_player_id
    state = draw_state
    for payload in (SkipDraw(pid), ReturnExploits(pid), FinishExploiting(pid), FinishRevealing(pid)):
        state = advance(state, payload)
    return state


@pytest.fixture
def finish_turn(advance):
    """Run the current player's whole turn without doing anything."""
    def _finish_turn(state: GameState) -> GameState:
        pid = state.current_player_id
        for payload in (
            SkipDraw(pid),
            ReturnExploits(pid),
            FinishExploiting(pid),
            FinishRevealing(pid),
            EndTurn(pid),
        ):
            state = advance(state, payload)
        return state
    return _finish_turn


class TestStartGame:
    """Tests for START_GAME_FROM_LOBBY."""

    def test_host_starts_game(self, two_player_lobby, advance):
        """Starting shuffles turn order and opens victory condition selection."""
        state = advance(two_player_lobby, StartGameFromLobby("p_alice"))

        assert state.selection_stage == SelectionStage.SELECTING
        assert state.turn_phase == TurnPhase.VC_SELECTION
        assert sorted(state.turn_order) == ["p_alice", "p_bob"]
        assert state.current_player_id == state.turn_order[0]
        assert state.vc_selection_player_index == state.player_index(state.turn_order[0])
        assert f"{STAMP}Game started by host Alice with 2 players." in state.game_log
        assert state.game_log[0].endswith("begins Victory Condition selection.")

    def test_non_host_cannot_start(self, two_player_lobby, act):
        """Only players[0] may start the game."""
        result = act(two_player_lobby, StartGameFromLobby("p_bob"))

        assert not result.success
        assert result.error == "Only the host can start the game."
        assert result.error_kind == ErrorKind.AUTHORIZATION_ERROR
        assert result.http_status == 403

    def test_needs_two_players(self, lobby_state, act):
        """A lone host cannot start."""
        result = act(lobby_state, StartGameFromLobby("p_alice"))

        assert not result.success
        assert result.error == "Game requires 2-4 players. Currently 1."
        assert result.http_status == 403

    def test_cannot_start_twice(self, selecting_state, act):
        """Starting again after selection began fails."""
        result = act(selecting_state, StartGameFromLobby("p_alice"))

        assert not result.success
        assert result.error == "Game cannot be started from this phase or state."

    def test_input_state_untouched(self, two_player_lobby, act):
        """The reducer works on a copy."""
        before = two_player_lobby.to_dict()
        act(two_player_lobby, StartGameFromLobby("p_alice"))
        assert two_player_lobby.to_dict() == before


class TestVictoryConditionSelection:
    """Tests for GET_VC_OFFER and SELECT_VC."""

    def test_offer_three_from_pool(self, selecting_state, act):
        """The current selector is offered three conditions from the pool."""
        pid = selecting_state.current_player_id
        result = act(selecting_state, GetVcOffer(pid))

        assert result.success
        assert not result.state_changed
        offered = result.data["offered_vcs"]
        assert len(offered) == 3
        assert all(vc["id"] in selecting_state.available_victory_conditions for vc in offered)
        assert all(vc["name"] and vc["description"] for vc in offered)
        assert result.new_state.game_log == selecting_state.game_log

    def test_offer_out_of_turn_is_empty(self, selecting_state, act):
        """Asking out of turn gets an empty answer, not an error."""
        other = other_player_id(selecting_state, selecting_state.current_player_id)
        result = act(selecting_state, GetVcOffer(other))

        assert result.success
        assert result.data == {}

    def test_select_passes_to_next_player(self, selecting_state, advance):
        """Selecting assigns the condition and hands selection on."""
        pid = selecting_state.current_player_id
        vc_id = selecting_state.available_victory_conditions[0]
        other = other_player_id(selecting_state, pid)

        state = advance(selecting_state, SelectVc(pid, vc_id))

        assert state.get_player(pid).victory_condition == vc_id
        assert vc_id not in state.available_victory_conditions
        assert state.current_player_id == other
        assert state.game_log[0] == f"{STAMP}Passing to {state.get_player(other).name} for VC selection."

    def test_select_out_of_turn(self, selecting_state, act):
        """Only the current selector may choose."""
        other = other_player_id(selecting_state, selecting_state.current_player_id)
        result = act(selecting_state, SelectVc(other, selecting_state.available_victory_conditions[0]))

        assert result.error == "Not your turn to select a Victory Condition."
        assert result.http_status == 403

    def test_select_invalid_condition(self, selecting_state, act):
        """Conditions outside the pool are rejected."""
        result = act(selecting_state, SelectVc(selecting_state.current_player_id, "vc_missing"))

        assert result.error == "Invalid Victory Condition selected"
        assert result.http_status == 400

    def test_cannot_select_twice(self, selecting_state, advance, act):
        """A victory condition is assigned once."""
        pid = selecting_state.current_player_id
        state = advance(selecting_state, SelectVc(pid, selecting_state.available_victory_conditions[0]))
        result = act(state, SelectVc(pid, state.available_victory_conditions[0]))

        assert not result.success
        assert result.error_kind == ErrorKind.VALIDATION_ERROR

    def test_last_selection_starts_round_one(self, draw_state, catalog):
        """When everyone has chosen, round 1 begins in the Draw phase."""
        state = draw_state

        assert state.turn_phase == TurnPhase.DRAW
        assert state.selection_stage == SelectionStage.DONE
        assert state.current_player_id == state.turn_order[0]
        assert state.round == 1
        assert state.active_event is None
        assert all(p.victory_condition for p in state.players)
        assert f"{STAMP}Round 1: No Active Event." in state.game_log
        upcoming = catalog.get_event(state.upcoming_event)
        assert f"{STAMP}Upcoming Event for Round 1: {upcoming.name}." in state.game_log

    def test_select_after_selection_closed(self, draw_state, act):
        """SELECT_VC outside selection fails on phase."""
        pid = draw_state.current_player_id
        result = act(draw_state, SelectVc(pid, draw_state.available_victory_conditions[0]))

        assert result.error == "Not in VC Selection phase"


class TestDraw:
    """Tests for REQUEST_DRAW_OFFER, CONFIRM_DRAW and SKIP_DRAW."""

    def test_draw_cost(self):
        """First card is free, each extra costs 3 gold."""
        assert [draw_cost(n) for n in range(4)] == [0, 0, 3, 6]

    def test_offer_shows_top_three(self, draw_state, act):
        """The offer is the top three cards of the player's zone deck."""
        pid = draw_state.current_player_id
        result = act(draw_state, RequestDrawOffer(pid))

        assert result.success
        assert not result.state_changed
        offered = result.data["offered_cards"]
        assert [c["instance_id"] for c in offered] == [r.instance_id for r in top_cards(draw_state, pid)]
        assert all(c["name"] and c["exploit_effect"] for c in offered)

    def test_offer_out_of_turn(self, draw_state, act):
        """Only the current player may look at the offer."""
        other = other_player_id(draw_state, draw_state.current_player_id)
        result = act(draw_state, RequestDrawOffer(other))

        assert result.error == "Not your turn or not in Draw phase."
        assert result.http_status == 403

    def test_draw_one_card_free(self, draw_state, advance):
        """Taking one card costs nothing and moves to Return Exploits."""
        pid = draw_state.current_player_id
        player = draw_state.get_player(pid)
        zone_name = player.current_zone
        card = top_cards(draw_state, pid, 1)[0]
        deck_size = len(draw_state.get_zone(zone_name).secret_deck)

        state = advance(draw_state, ConfirmDraw(pid, [card]))

        drawn = state.get_player(pid)
        assert drawn.hand == [card]
        assert drawn.gold == 5
        assert len(state.get_zone(zone_name).secret_deck) == deck_size - 1
        assert state.turn_phase == TurnPhase.RETURN_EXPLOITS
        assert state.game_log[0] == (
            f"{STAMP}{player.name} drew 1 card(s) from {zone_name}. Gold: 5. Now in Return Exploits."
        )

    def test_draw_two_cards_costs_three(self, draw_state, advance):
        """The second card costs 3 gold."""
        pid = draw_state.current_player_id
        state = advance(draw_state, ConfirmDraw(pid, top_cards(draw_state, pid, 2), cost=3))

        assert state.get_player(pid).gold == 2
        assert len(state.get_player(pid).hand) == 2

    def test_not_enough_gold(self, draw_state, act):
        """Three cards cost 6; starting gold is 5."""
        pid = draw_state.current_player_id
        result = act(draw_state, ConfirmDraw(pid, top_cards(draw_state, pid, 3)))

        assert result.error == "Not enough gold"
        assert result.http_status == 403

    def test_two_cards_with_one_gold(self, draw_state, act):
        """A short purse rejects the draw and leaves everything in place."""
        pid = draw_state.current_player_id
        state = draw_state.clone()
        state.get_player(pid).gold = 1
        before = state.to_dict()

        result = act(state, ConfirmDraw(pid, top_cards(state, pid, 2)))

        assert result.error == "Not enough gold"
        assert state.to_dict() == before

    def test_client_cost_must_match(self, draw_state, act):
        """A client-quoted cost that disagrees with the server is rejected."""
        pid = draw_state.current_player_id
        result = act(draw_state, ConfirmDraw(pid, top_cards(draw_state, pid, 2), cost=0))

        assert not result.success
        assert result.http_status == 400

    def test_stale_selection_conflicts(self, draw_state, act):
        """Cards below the top three are a stale offer."""
        pid = draw_state.current_player_id
        fourth = top_cards(draw_state, pid, 4)[3]
        result = act(draw_state, ConfirmDraw(pid, [fourth]))

        assert result.error == "Invalid draw selection or deck state changed."
        assert result.error_kind == ErrorKind.CONFLICT
        assert result.http_status == 409

    def test_duplicate_selection(self, draw_state, act):
        """The same card cannot be taken twice."""
        pid = draw_state.current_player_id
        card = top_cards(draw_state, pid, 1)[0]
        result = act(draw_state, ConfirmDraw(pid, [card, card]))

        assert result.http_status == 400

    def test_draw_out_of_turn(self, draw_state, act):
        """The other player cannot draw."""
        pid = draw_state.current_player_id
        other = other_player_id(draw_state, pid)
        result = act(draw_state, ConfirmDraw(other, top_cards(draw_state, pid, 1)))

        assert result.error == "Not your turn"

    def test_skip_draw(self, draw_state, advance):
        """Skipping moves straight to Return Exploits."""
        pid = draw_state.current_player_id
        state = advance(draw_state, SkipDraw(pid))

        assert state.turn_phase == TurnPhase.RETURN_EXPLOITS
        assert state.game_log[0].endswith("skipped drawing. Now in Return Exploits.")

    def test_draw_in_wrong_phase(self, draw_state, advance, act):
        """Draw actions outside the Draw phase fail on phase."""
        pid = draw_state.current_player_id
        state = advance(draw_state, SkipDraw(pid))

        assert act(state, ConfirmDraw(pid, [])).error == "Not in Draw phase"
        assert act(state, SkipDraw(pid)).error == "Not in Draw phase"

    def test_cards_never_duplicated(self, draw_state, advance):
        """Every card instance sits in exactly one place after a draw."""
        pid = draw_state.current_player_id
        before = draw_state.card_locations()
        state = advance(draw_state, ConfirmDraw(pid, top_cards(draw_state, pid, 2)))
        after = state.card_locations()

        assert set(after) == set(before)
        assert all(len(places) == 1 for places in after.values())


class TestExploitAndReveal:
    """Tests for the exploit and reveal phases."""

    def test_exploit_places_card_on_mask(self, exploit_state, advance, catalog):
        """Exploiting moves a card from hand to an empty mask."""
        pid = exploit_state.current_player_id
        card = exploit_state.get_player(pid).hand[0]

        state = advance(exploit_state, ExploitSecret(pid, card, MaskType.SOLAR))

        player = state.get_player(pid)
        assert player.masks[MaskType.SOLAR] == card
        assert card not in player.hand
        name = catalog.get_card(card.base_id).name
        assert f"exploited {name} onto solar. Effect:" in state.game_log[0]

    def test_mask_holds_one_card(self, exploit_state, advance, act):
        """An occupied mask rejects a second card."""
        pid = exploit_state.current_player_id
        first, second = exploit_state.get_player(pid).hand
        state = advance(exploit_state, ExploitSecret(pid, first, MaskType.LUNAR))
        result = act(state, ExploitSecret(pid, second, MaskType.LUNAR))

        assert result.error == "Mask lunar is occupied."
        assert result.http_status == 400

    def test_exploit_card_not_in_hand(self, exploit_state, act):
        """Only cards in hand can be exploited."""
        pid = exploit_state.current_player_id
        deck_card = top_cards(exploit_state, pid, 1)[0]
        result = act(exploit_state, ExploitSecret(pid, deck_card, MaskType.SOLAR))

        assert result.error == "Card not found in hand."

    def test_return_exploits_empties_masks(self, draw_state, advance):
        """Returning exploits moves every mask card back to hand."""
        pid = draw_state.current_player_id
        state = advance(draw_state, SkipDraw(pid))
        card = top_cards(state, pid, 1)[0]
        state.get_zone(state.get_player(pid).current_zone).secret_deck.remove(card)
        state.get_player(pid).masks[MaskType.SHADOW] = card

        state = advance(state, ReturnExploits(pid))

        player = state.get_player(pid)
        assert player.masks[MaskType.SHADOW] is None
        assert card in player.hand
        assert state.turn_phase == TurnPhase.EXPLOIT_SECRETS

    def test_reveal_tracks_mask_once(self, exploit_state, advance, catalog):
        """Revealing the same mask twice records it once."""
        pid = exploit_state.current_player_id
        card = exploit_state.get_player(pid).hand[0]
        state = advance(exploit_state, ExploitSecret(pid, card, MaskType.SOLAR))
        state = advance(state, FinishExploiting(pid))
        assert state.turn_phase == TurnPhase.REVEAL_SECRETS

        state = advance(state, RevealMask(pid, MaskType.SOLAR))
        state = advance(state, RevealMask(pid, MaskType.SOLAR))

        assert state.revealed_mask_types_this_turn == [MaskType.SOLAR]
        assert len(state.currently_revealed_masks) == 1
        assert state.currently_revealed_masks[0].revealed_by_player_id == pid
        name = catalog.get_card(card.base_id).name
        assert f"revealed solar mask. Secret: {name}." in state.game_log[0]

    def test_reveal_is_free(self, exploit_state, advance):
        """Revealing costs no information."""
        pid = exploit_state.current_player_id
        state = advance(exploit_state, FinishExploiting(pid))
        information = state.get_player(pid).information

        state = advance(state, RevealMask(pid, MaskType.LUNAR))

        assert state.get_player(pid).information == information
        assert state.game_log[0].endswith("revealed lunar mask. Empty mask revealed.")

    def test_eclipse_cannot_be_revealed(self, exploit_state, advance, act):
        """The eclipse mask is never revealed."""
        pid = exploit_state.current_player_id
        state = advance(exploit_state, FinishExploiting(pid))
        result = act(state, RevealMask(pid, MaskType.ECLIPSE))

        assert result.error == "Eclipse mask cannot be revealed."
        assert result.http_status == 400

    def test_finish_revealing_clears_trackers(self, exploit_state, advance):
        """Finishing the reveal phase clears this player's pulses."""
        pid = exploit_state.current_player_id
        state = advance(exploit_state, FinishExploiting(pid))
        state = advance(state, RevealMask(pid, MaskType.SOLAR))
        state = advance(state, FinishRevealing(pid))

        assert state.turn_phase == TurnPhase.END_OF_TURN
        assert state.revealed_mask_types_this_turn == []
        assert state.currently_revealed_masks == []

    def test_reveal_in_wrong_phase(self, exploit_state, act):
        """Revealing during Exploit Secrets fails on phase."""
        pid = exploit_state.current_player_id
        result = act(exploit_state, RevealMask(pid, MaskType.SOLAR))

        assert result.error == "Not in Reveal Secrets phase."
        assert result.http_status == 403


class TestMove:
    """Tests for MOVE_PLAYER."""

    def test_move_to_bordering_zone(self, end_of_turn_state, advance):
        """Players may move to a bordering zone."""
        pid = end_of_turn_state.current_player_id
        zone = end_of_turn_state.get_zone(end_of_turn_state.get_player(pid).current_zone)
        target = zone.borders[0]

        state = advance(end_of_turn_state, MovePlayer(pid, target))

        assert state.get_player(pid).current_zone == target
        assert state.has_moved_this_turn

    def test_staying_put_is_allowed(self, end_of_turn_state, advance):
        """Moving to the current zone is a legal (wasted) move."""
        pid = end_of_turn_state.current_player_id
        here = end_of_turn_state.get_player(pid).current_zone

        state = advance(end_of_turn_state, MovePlayer(pid, here))

        assert state.get_player(pid).current_zone == here
        assert state.has_moved_this_turn

    def test_non_bordering_zone_rejected(self, end_of_turn_state, act, catalog):
        """Zones that do not border the current one are out of reach."""
        pid = end_of_turn_state.current_player_id
        zone = end_of_turn_state.get_zone(end_of_turn_state.get_player(pid).current_zone)
        target = next(
            name for name in catalog.zone_names
            if name != zone.name and name not in zone.borders
        )

        result = act(end_of_turn_state, MovePlayer(pid, target))

        assert result.error == f"Cannot move to {target}."
        assert result.http_status == 400

    def test_one_move_per_turn(self, end_of_turn_state, advance, act):
        """A second move in the same turn is rejected."""
        pid = end_of_turn_state.current_player_id
        here = end_of_turn_state.get_player(pid).current_zone
        state = advance(end_of_turn_state, MovePlayer(pid, here))
        result = act(state, MovePlayer(pid, here))

        assert result.error == "You have already moved this turn."
        assert result.http_status == 403

    def test_move_only_at_end_of_turn(self, draw_state, act):
        """Moving during the Draw phase fails on phase."""
        pid = draw_state.current_player_id
        here = draw_state.get_player(pid).current_zone

        assert act(draw_state, MovePlayer(pid, here)).error == "Not in End of Turn phase."


class TestEndTurnAndRounds:
    """Tests for END_TURN, rounds and event rotation."""

    def test_end_turn_passes_to_next_player(self, end_of_turn_state, advance):
        """The next player in turn order starts in the Draw phase."""
        pid = end_of_turn_state.current_player_id
        here = end_of_turn_state.get_player(pid).current_zone
        state = advance(end_of_turn_state, MovePlayer(pid, here))

        state = advance(state, EndTurn(pid))

        nxt = end_of_turn_state.turn_order[1]
        assert state.current_player_id == nxt
        assert state.current_turn_player_index == state.player_index(nxt)
        assert state.turn_phase == TurnPhase.DRAW
        assert state.round == 1
        assert not state.has_moved_this_turn
        assert state.game_log[0] == f"{STAMP}It is now {state.get_player(nxt).name}'s turn (Draw Phase)."

    def test_end_turn_wrong_phase(self, draw_state, act):
        """Ending the turn during Draw fails on phase."""
        result = act(draw_state, EndTurn(draw_state.current_player_id))

        assert result.error == "Not in End of Turn phase."

    def test_end_turn_out_of_turn(self, end_of_turn_state, act):
        """The waiting player cannot end the turn."""
        other = other_player_id(end_of_turn_state, end_of_turn_state.current_player_id)
        result = act(end_of_turn_state, EndTurn(other))

        assert result.error == "Not your turn"
        assert result.http_status == 403

    def test_full_rotation_starts_round_two(self, draw_state, finish_turn, catalog):
        """After everyone's turn the round advances and events rotate."""
        upcoming = draw_state.upcoming_event
        deck_size = len(draw_state.event_deck)

        state = finish_turn(finish_turn(draw_state))

        assert state.round == 2
        assert state.current_player_id == state.turn_order[0]
        assert state.active_event == upcoming
        assert state.upcoming_event is not None
        assert state.upcoming_event != state.active_event
        assert len(state.event_deck) == deck_size - 1
        assert f"{STAMP}Round 2 begins." in state.game_log
        assert f"{STAMP}New Active Event for Round 2: {catalog.get_event(upcoming).name}." in state.game_log

    def test_old_active_event_goes_to_bottom(self, draw_state, finish_turn):
        """The outgoing active event is placed at the bottom of the deck."""
        round_two = finish_turn(finish_turn(draw_state))
        active = round_two.active_event

        round_three = finish_turn(finish_turn(round_two))

        assert round_three.round == 3
        assert round_three.event_deck[-1] == active
        assert round_three.active_event == round_two.upcoming_event

    def test_event_deck_shuffled_lazily(self, draw_state, finish_turn, catalog):
        """A missing event deck is rebuilt from events not in play."""
        state = draw_state.clone()
        state.event_deck = None

        state = finish_turn(finish_turn(state))

        in_play = {state.active_event, state.upcoming_event}
        assert len(state.event_deck) == len(catalog.events) - 2
        assert not in_play & set(state.event_deck)

    def test_empty_event_deck_leaves_no_upcoming(self, draw_state, finish_turn):
        """With nothing left to draw, the upcoming slot stays empty."""
        state = draw_state.clone()
        state.event_deck = []
        upcoming = state.upcoming_event

        state = finish_turn(finish_turn(state))

        assert state.round == 2
        assert state.active_event == upcoming
        assert state.upcoming_event is None
        assert state.event_deck == []
        assert f"{STAMP}No Upcoming Event for Round 2." in state.game_log

    def test_round_never_decreases(self, draw_state, finish_turn):
        """Rounds only go up."""
        state = draw_state
        rounds = [state.round]
        for _ in range(6):
            state = finish_turn(state)
            rounds.append(state.round)
        assert rounds == sorted(rounds)
        assert state.round == 4


class TestCorrections:
    """Tests for resource and card corrections."""

    def test_adjust_resource_clamps(self, draw_state, advance):
        """Resources clamp at zero and the log shows old and new."""
        state = advance(draw_state, AdjustPlayerResource("p_alice", "gold", -10))

        assert state.get_player("p_alice").gold == 0
        assert state.game_log[0] == f"{STAMP}Alice's gold changed by -10. Old: 5, New: 0."

    def test_adjust_unknown_resource(self, draw_state, act):
        """A resource outside the four player resources is a validation error."""
        result = act(draw_state, AdjustPlayerResource("p_alice", "mana", 1))

        assert result.error == "Invalid resource type: mana"
        assert result.error_kind == ErrorKind.VALIDATION_ERROR
        assert result.http_status == 400

    def test_adjust_unknown_player(self, draw_state, act):
        """Adjusting a missing player is a 404."""
        result = act(draw_state, AdjustPlayerResource("p_nobody", "gold", 1))

        assert result.error_kind == ErrorKind.NOT_FOUND
        assert result.http_status == 404

    def test_adjust_suspicion(self, draw_state, advance):
        """Global suspicion moves by the amount and clamps at zero."""
        state = advance(draw_state, AdjustGlobalSuspicion(2))
        assert state.suspicion == 2
        assert state.game_log[0] == f"{STAMP}Global suspicion adjusted by 2. Old: 0, New: 2."

        state = advance(state, AdjustGlobalSuspicion(-5))
        assert state.suspicion == 0

    def test_adjust_max_suspicion(self, draw_state, advance):
        """The per-turn suspicion cap clamps at zero."""
        state = advance(draw_state, AdjustMaxSuspicionPerTurn(1))
        assert state.max_suspicion_adjustment == 3

        state = advance(state, AdjustMaxSuspicionPerTurn(-10))
        assert state.max_suspicion_adjustment == 0

    def test_discard_to_bottom_by_default(self, draw_state, advance):
        """A discarded card goes to the bottom of its zone deck."""
        pid = draw_state.current_player_id
        card = top_cards(draw_state, pid, 1)[0]
        state = advance(draw_state, ConfirmDraw(pid, [card]))
        zone_name = state.get_player(pid).current_zone

        state = advance(state, ManualDiscardCard(pid, card.instance_id))

        deck = state.get_zone(zone_name).secret_deck
        assert deck[-1] == card
        assert card not in state.get_player(pid).hand
        assert state.game_log[0].endswith(f"Returned to {zone_name} deck at position {len(deck) - 1}.")

    def test_discard_to_top(self, draw_state, advance):
        """Position 0 puts the card back on top."""
        pid = draw_state.current_player_id
        card = top_cards(draw_state, pid, 1)[0]
        state = advance(draw_state, ConfirmDraw(pid, [card]))

        state = advance(state, ManualDiscardCard(pid, card.instance_id, return_to_position=0))

        assert top_cards(state, pid, 1)[0] == card

    def test_discard_position_clamped(self, draw_state, advance):
        """Positions past the end clamp to the bottom."""
        pid = draw_state.current_player_id
        card = top_cards(draw_state, pid, 1)[0]
        state = advance(draw_state, ConfirmDraw(pid, [card]))

        state = advance(state, ManualDiscardCard(pid, card.instance_id, return_to_position=999))

        assert state.get_zone(state.get_player(pid).current_zone).secret_deck[-1] == card

    def test_discard_card_not_in_hand(self, draw_state, act):
        """Unknown cards cannot be discarded."""
        result = act(draw_state, ManualDiscardCard("p_alice", "missing"))

        assert result.error == "Card not found in hand."

    def test_discard_from_mask(self, draw_state, advance):
        """A mask card can be discarded back to its deck."""
        pid = draw_state.current_player_id
        state = draw_state.clone()
        zone = state.get_zone(state.get_player(pid).current_zone)
        card = zone.secret_deck.pop(0)
        state.get_player(pid).masks[MaskType.SHADOW] = card

        state = advance(state, ManualDiscardFromMask(pid, MaskType.SHADOW))

        assert state.get_player(pid).masks[MaskType.SHADOW] is None
        assert state.get_zone(zone.name).secret_deck[-1] == card
        assert "from shadow mask" in state.game_log[0]

    def test_discard_from_empty_mask(self, draw_state, act):
        """Empty masks have nothing to discard."""
        result = act(draw_state, ManualDiscardFromMask("p_alice", MaskType.LUNAR))

        assert result.error == "Mask lunar is empty."
        assert result.http_status == 400

    def test_return_mask_to_hand(self, draw_state, advance):
        """A mask card can be taken back into hand."""
        state = draw_state.clone()
        card = state.zones[0].secret_deck.pop(0)
        state.get_player("p_bob").masks[MaskType.SOLAR] = card

        state = advance(state, ManualReturnSecretFromMaskToHand("p_bob", MaskType.SOLAR))

        bob = state.get_player("p_bob")
        assert bob.masks[MaskType.SOLAR] is None
        assert bob.hand == [card]

    def test_return_from_empty_mask(self, draw_state, act):
        """Returning from an empty mask fails."""
        result = act(draw_state, ManualReturnSecretFromMaskToHand("p_bob", MaskType.SHADOW))

        assert result.error == "No secret on shadow mask."

    def test_give_secret(self, draw_state, advance):
        """A card moves from one hand to another."""
        state = draw_state.clone()
        card = state.zones[0].secret_deck.pop(0)
        state.get_player("p_alice").hand.append(card)

        state = advance(state, GiveSecretToPlayer("p_alice", "p_bob", card.instance_id))

        assert state.get_player("p_alice").hand == []
        assert state.get_player("p_bob").hand == [card]

    def test_give_secret_to_missing_player(self, draw_state, act):
        """Both players must exist."""
        result = act(draw_state, GiveSecretToPlayer("p_alice", "p_nobody", "x"))

        assert result.error == "Player not found."
        assert result.http_status == 404


class TestHandReveal:
    """Tests for the hand reveal consent protocol."""

    def test_cannot_request_own_hand(self, draw_state, act):
        """Players cannot ask to see their own hand."""
        result = act(draw_state, RequestHandReveal("p_alice", "p_alice"))

        assert result.error == "Cannot request to see your own hand."

    def test_request_sets_pending(self, draw_state, advance):
        """A request waits on the target player."""
        state = advance(draw_state, RequestHandReveal("p_alice", "p_bob"))

        pending = state.get_player("p_bob").pending_hand_reveal_request_from
        assert pending.player_id == "p_alice"
        assert pending.player_name == "Alice"

    def test_allow_grants_snapshot(self, draw_state, advance):
        """Allowing gives the requester a copy of the hand."""
        state = draw_state.clone()
        card = state.zones[0].secret_deck.pop(0)
        state.get_player("p_bob").hand.append(card)
        state = advance(state, RequestHandReveal("p_alice", "p_bob"))

        state = advance(state, RespondToHandReveal("p_bob", "p_alice", True))

        assert state.get_player("p_bob").pending_hand_reveal_request_from is None
        assert state.revealed_hand.for_player_id == "p_alice"
        assert state.revealed_hand.target_player_id == "p_bob"
        assert state.revealed_hand.hand == [card]

    def test_deny_clears_request(self, draw_state, advance):
        """Denying clears the request without a grant."""
        state = advance(draw_state, RequestHandReveal("p_alice", "p_bob"))
        state = advance(state, RespondToHandReveal("p_bob", "p_alice", False))

        assert state.get_player("p_bob").pending_hand_reveal_request_from is None
        assert state.revealed_hand is None
        assert "denied" in state.game_log[0]

    def test_respond_without_request(self, draw_state, act):
        """Responding to nothing fails."""
        result = act(draw_state, RespondToHandReveal("p_bob", "p_alice", True))

        assert not result.success
        assert result.http_status == 400

    def test_acknowledge_clears_grant(self, draw_state, advance, act):
        """Only the viewer's acknowledgement clears the grant."""
        state = advance(draw_state, RequestHandReveal("p_alice", "p_bob"))
        state = advance(state, RespondToHandReveal("p_bob", "p_alice", True))

        other = act(state, AcknowledgeHandReveal("p_bob"))
        assert other.success
        assert not other.state_changed

        state = advance(state, AcknowledgeHandReveal("p_alice"))
        assert state.revealed_hand is None


class TestVictoryConditionReveal:
    """Tests for REVEAL_VICTORY_CONDITION."""

    def test_reveal(self, draw_state, advance, catalog):
        """Revealing flips the flag and announces the condition."""
        state = advance(draw_state, RevealVictoryCondition("p_bob"))

        bob = state.get_player("p_bob")
        assert bob.is_victory_condition_revealed
        name = catalog.get_victory_condition(bob.victory_condition).name
        assert state.game_log[0] == f"{STAMP}Bob has revealed their Victory Condition: {name}!"

    def test_reveal_twice(self, draw_state, advance, act):
        """The flag only goes one way."""
        state = advance(draw_state, RevealVictoryCondition("p_bob"))
        result = act(state, RevealVictoryCondition("p_bob"))

        assert result.error == "Victory Condition already revealed"

    def test_reveal_without_condition(self, two_player_lobby, act):
        """Nothing to reveal before selection."""
        result = act(two_player_lobby, RevealVictoryCondition("p_bob"))

        assert result.error == "No Victory Condition to reveal"


class TestHostActions:
    """Tests for TERMINATE_SESSION and CONCLUDE_GAME."""

    def test_terminate_by_host(self, draw_state, act):
        """The host can end the session."""
        result = act(draw_state, TerminateSession("p_alice"))

        assert result.success
        assert result.delete_session
        assert result.winner_name is None

    def test_terminate_by_guest(self, draw_state, act):
        """Guests cannot end the session."""
        result = act(draw_state, TerminateSession("p_bob"))

        assert result.error == "Only the host can terminate the session."
        assert result.http_status == 403

    def test_conclude_names_winner(self, draw_state, act):
        """Concluding reports the winner for the stats update."""
        result = act(draw_state, ConcludeGame("p_alice", "p_bob"))

        assert result.success
        assert result.delete_session
        assert result.winner_name == "Bob"

    def test_conclude_unknown_winner(self, draw_state, act):
        """The winner must be in the game."""
        result = act(draw_state, ConcludeGame("p_alice", "p_nobody"))

        assert result.error == "Selected winning player not found."
        assert result.http_status == 404

    def test_conclude_by_guest(self, draw_state, act):
        """Only the host declares the winner."""
        result = act(draw_state, ConcludeGame("p_bob", "p_bob"))

        assert result.error == "Only the host can conclude the game."


class TestLogAndPurity:
    """Tests for log bounds and failure behaviour."""

    def test_log_stays_bounded(self, draw_state, advance):
        """The log never grows past its cap."""
        state = draw_state
        for _ in range(60):
            state = advance(state, AdjustPlayerResource("p_alice", "trust", 1))

        assert len(state.game_log) == MAX_LOG_ENTRIES
        assert state.game_log[0] == f"{STAMP}Alice's trust changed by 1. Old: 67, New: 68."

    def test_result_lists_new_entries(self, draw_state, act):
        """state_changes holds exactly the entries the action wrote."""
        result = act(draw_state, AdjustGlobalSuspicion(1))

        assert result.state_changes == [f"{STAMP}Global suspicion adjusted by 1. Old: 0, New: 1."]

    def test_rejection_writes_nothing(self, draw_state, act):
        """A rejected action returns no state and leaves the input alone."""
        before = draw_state.to_dict()
        result = act(draw_state, EndTurn(draw_state.current_player_id))

        assert not result.success
        assert result.new_state is None
        assert draw_state.to_dict() == before

    def test_apply_action_helper(self, draw_state, catalog):
        """The module-level helper applies with a default reducer."""
        result = apply_action(catalog, draw_state, Action.of(AdjustGlobalSuspicion(3)))

        assert result.success
        assert result.new_state.suspicion == 3
