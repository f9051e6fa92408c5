import pytest

from passplay.core.types import FailureReason
from passplay.environments.imposter import Phase, Role, Team
from passplay.logging import EventType, GameLogger


def test_full_round_flow(make_session, start_round, reveal_all):
    session, ids = make_session()
    assert session.phase == Phase.SETUP

    start_round(session)
    assert session.phase == Phase.PASSING
    assert session.state.round_number == 1
    assert session.state.current_player_index == 0

    reveal_all(session)
    assert session.phase == Phase.STARTER
    assert session.state.all_seen()
    assert session.state.artifacts.round_starter_name in {p.name for p in session.state.players}

    assert session.start_discussion().payload == 300
    assert session.phase == Phase.PLAYING
    assert session.go_to_voting().ok
    assert session.phase == Phase.VOTING

    players = session.state.players
    target = players[0]
    for voter in players[1:]:
        assert session.submit_vote(voter.id, target.id).ok
    result = session.submit_vote(target.id, players[1].id)

    assert session.phase == Phase.RESULTS
    assert result.payload.eliminated_id == target.id
    assert session.state.vote_result.counts[target.id] == 3
    assert session.state.outcome is not None

    assert session.new_round().ok
    assert session.phase == Phase.SETUP
    assert [p.name for p in session.state.players] != []
    assert all(p.role == Role.CIVILIAN and not p.has_seen_card for p in session.state.players)
    assert session.state.artifacts.secret_word == ""
    assert session.state.selected_category_id is None


def test_setup_requires_three_players(make_session):
    session, _ = make_session(names=("A", "B"))

    result = session.proceed_to_category()

    assert result.ok is False
    assert result.reason == FailureReason.INSUFFICIENT_PLAYERS
    assert session.phase == Phase.SETUP


def test_start_requires_category(make_session):
    session, _ = make_session()
    session.proceed_to_category()

    result = session.start_game()

    assert result.reason == FailureReason.NO_CATEGORY_SELECTED
    assert session.phase == Phase.CATEGORY
    assert session.state.round_number == 0


def test_unknown_category_rejected(make_session):
    session, _ = make_session()
    session.proceed_to_category()

    result = session.select_category("nope")

    assert result.reason == FailureReason.UNKNOWN_CATEGORY
    assert session.state.selected_category_id is None


def test_phase_violations_leave_state_unchanged(make_session):
    session, ids = make_session()
    before = session.snapshot()

    for intent in (
        lambda: session.submit_vote(ids[0], ids[1]),
        session.start_game,
        session.mark_current_player_seen,
        session.request_reveal,
        session.hide_card,
        session.go_to_voting,
        session.skip_voting,
        session.reveal_results,
        session.new_round,
        session.start_discussion,
        session.current_card,
    ):
        result = intent()
        assert result.ok is False
        assert result.reason == FailureReason.PHASE_VIOLATION

    assert session.snapshot() == before


def test_roster_locked_outside_setup(make_session, start_round):
    session, ids = make_session()
    start_round(session)

    assert session.add_player("E").reason == FailureReason.PHASE_VIOLATION
    assert session.remove_player(ids[0]).reason == FailureReason.PHASE_VIOLATION
    assert session.update_settings(imposter_count=2).reason == FailureReason.PHASE_VIOLATION
    assert session.state.player_count == 4


def test_add_and_remove_players(make_session):
    session, ids = make_session()

    assert session.add_player("   ").reason == FailureReason.INVALID_PLAYER_NAME
    assert session.add_player("a").reason == FailureReason.INVALID_PLAYER_NAME
    assert session.remove_player("missing").reason == FailureReason.UNKNOWN_PLAYER

    added = session.add_player("  Eve  ")
    assert added.ok
    assert session.state.get_player(added.payload).name == "Eve"

    assert session.remove_player(ids[0]).ok
    assert [p.name for p in session.state.players] == ["B", "C", "D", "Eve"]


def test_update_settings(make_session):
    session, _ = make_session()

    assert session.update_settings(imposterCount=2, jester_enabled=True).ok
    assert session.state.settings.imposter_count == 2
    assert session.state.settings.jester_enabled is True

    bad = session.update_settings(imposter_count=0)
    assert bad.reason == FailureReason.INVALID_SETTINGS
    unknown = session.update_settings(volume=11)
    assert unknown.reason == FailureReason.INVALID_SETTINGS
    assert session.state.settings.imposter_count == 2


def test_return_to_setup_resets_round_state(make_session):
    session, _ = make_session()
    session.proceed_to_category()
    session.state.current_player_index = 2
    session.state.players[0].has_seen_card = True

    assert session.return_to_setup().ok
    assert session.phase == Phase.SETUP
    assert session.state.current_player_index == 0
    assert not any(p.has_seen_card for p in session.state.players)


def test_acknowledgment_is_monotonic(make_session, start_round):
    session, _ = make_session(names=("A", "B", "C", "D", "E"))
    start_round(session)

    seen_history = []
    while session.phase in (Phase.PASSING, Phase.REVEAL):
        if session.phase == Phase.PASSING:
            session.request_reveal()
            # Peek and hide once without acknowledging
            session.hide_card()
            session.request_reveal()
        else:
            index = session.state.current_player_index
            assert session.state.players[index].has_seen_card is False
            session.mark_current_player_seen()
            seen_history.append([p.has_seen_card for p in session.state.players])

    for earlier, later in zip(seen_history, seen_history[1:]):
        assert all(b for a, b in zip(earlier, later) if a)
    assert seen_history[-1] == [True] * 5
    assert [sum(flags) for flags in seen_history] == [1, 2, 3, 4, 5]


def test_hide_card_does_not_acknowledge(make_session, start_round):
    session, _ = make_session()
    start_round(session)

    session.request_reveal()
    session.hide_card()

    assert session.phase == Phase.PASSING
    assert session.state.current_player_index == 0
    assert not session.state.players[0].has_seen_card


def test_current_card_only_for_current_player(make_session, start_round):
    session, _ = make_session(confused_enabled=True, jester_enabled=True)
    start_round(session)

    assert session.current_card().reason == FailureReason.PHASE_VIOLATION

    seen = []
    while session.phase in (Phase.PASSING, Phase.REVEAL):
        if session.phase == Phase.PASSING:
            session.request_reveal()
            continue
        card = session.current_card().payload
        assert card.player_id == session.current_player.id
        seen.append(card)
        session.mark_current_player_seen()

    assert len(seen) == 4
    artifacts = session.state.artifacts
    roles = {p.id: p.role for p in session.state.players}
    for card in seen:
        role = roles[card.player_id]
        if role == Role.IMPOSTER:
            assert card.word is None
            assert card.category_hint == "Fruit"
        elif role == Role.JESTER:
            assert card.word is None
            assert card.shown_role == Role.JESTER
        elif role == Role.CONFUSED:
            assert card.shown_role == Role.CIVILIAN
            assert card.word == artifacts.confused_word
        else:
            assert card.word == artifacts.secret_word


def test_imposter_hint_disabled(make_session, start_round):
    session, _ = make_session(imposter_hint=False)
    start_round(session)

    while session.phase in (Phase.PASSING, Phase.REVEAL):
        if session.phase == Phase.PASSING:
            session.request_reveal()
            continue
        card = session.current_card().payload
        if card.shown_role == Role.IMPOSTER:
            assert card.category_hint is None
        session.mark_current_player_seen()


def test_accomplice_learns_imposter_name(make_session, start_round):
    session, _ = make_session(accomplice_enabled=True)
    start_round(session)

    while session.phase in (Phase.PASSING, Phase.REVEAL):
        if session.phase == Phase.PASSING:
            session.request_reveal()
            continue
        card = session.current_card().payload
        if card.shown_role == Role.ACCOMPLICE:
            assert card.partner_name == session.state.artifacts.imposter_name
            assert card.word == session.state.artifacts.secret_word
        else:
            assert card.partner_name is None
        session.mark_current_player_seen()


def test_troll_round_session(make_session, start_round, reveal_all, forced_coin):
    session, _ = make_session(rng=forced_coin(0.0), troll_mode=True, imposter_never_starts=True)
    start_round(session)

    artifacts = session.state.artifacts
    assert artifacts.is_troll_round is True
    assert artifacts.troll_word in ("Kazoo", "Tuba")
    assert session.state.count_role(Role.IMPOSTER) == 4

    session.request_reveal()
    card = session.current_card().payload
    assert card.word == artifacts.troll_word
    assert card.shown_role is None

    session.hide_card()
    reveal_all(session)
    # Exclusion is lifted in troll rounds, so anyone may start
    assert artifacts.round_starter_name is not None


@pytest.mark.parametrize("seed", range(25))
def test_imposter_never_starts(make_session, start_round, reveal_all, seed):
    session, _ = make_session(
        names=("A", "B", "C", "D", "E", "F"),
        seed=seed,
        imposter_count=2,
        imposter_never_starts=True,
    )
    start_round(session)
    reveal_all(session)

    starter = session.state.artifacts.round_starter_name
    imposters = {p.name for p in session.state.players_with_role(Role.IMPOSTER)}
    assert starter not in imposters


def test_double_vote_is_rejected_and_not_counted(make_session, start_round, reveal_all):
    session, _ = make_session()
    start_round(session)
    reveal_all(session)
    session.start_discussion()
    session.go_to_voting()

    players = session.state.players
    assert session.submit_vote(players[0].id, players[1].id).ok
    second = session.submit_vote(players[0].id, players[2].id)

    assert second.reason == FailureReason.INVALID_VOTE
    assert session.state.artifacts.votes == {players[0].id: players[1].id}

    session.reveal_results()
    assert session.state.vote_result.counts[players[1].id] == 1
    assert session.state.vote_result.counts[players[2].id] == 0


def test_invalid_votes(make_session, start_round, reveal_all):
    session, _ = make_session()
    start_round(session)
    reveal_all(session)
    session.start_discussion()
    session.go_to_voting()
    voter = session.state.players[0]

    assert session.submit_vote(voter.id, "ghost").reason == FailureReason.INVALID_VOTE
    assert session.submit_vote("ghost", voter.id).reason == FailureReason.INVALID_VOTE
    assert session.submit_vote(voter.id, voter.id).reason == FailureReason.INVALID_VOTE
    assert session.state.artifacts.votes == {}


def test_next_voter_follows_pass_order(make_session, start_round, reveal_all):
    session, _ = make_session()
    start_round(session)
    reveal_all(session)
    session.start_discussion()

    assert session.next_voter() is None
    session.go_to_voting()
    players = session.state.players

    assert session.next_voter().id == players[0].id
    session.submit_vote(players[0].id, players[1].id)
    assert session.next_voter().id == players[1].id


def test_reveal_results_with_no_votes(make_session, start_round, reveal_all):
    session, _ = make_session()
    start_round(session)
    reveal_all(session)
    session.start_discussion()
    session.go_to_voting()

    tally = session.reveal_results().payload

    assert session.phase == Phase.RESULTS
    assert tally.eliminated_id == session.state.players[0].id
    assert tally.decisive is False
    assert session.state.outcome.winning_team is None


@pytest.mark.parametrize("from_voting", [False, True])
def test_skip_voting(make_session, start_round, reveal_all, from_voting):
    session, _ = make_session()
    start_round(session)
    reveal_all(session)
    session.start_discussion()
    if from_voting:
        session.go_to_voting()
        players = session.state.players
        session.submit_vote(players[0].id, players[1].id)

    assert session.skip_voting().ok
    assert session.phase == Phase.RESULTS
    assert session.state.vote_result is None
    assert session.state.artifacts.votes == {}
    assert session.state.outcome.skipped is True


def test_outcome_listener_receives_outcome(make_session, start_round, reveal_all):
    session, _ = make_session()
    received = []
    session.add_outcome_listener(received.append)

    start_round(session)
    reveal_all(session)
    session.start_discussion()
    session.go_to_voting()
    players = session.state.players
    imposter = session.state.players_with_role(Role.IMPOSTER)[0]
    for voter in players:
        suspect = imposter if voter.id != imposter.id else next(p for p in players if p.id != imposter.id)
        session.submit_vote(voter.id, suspect.id)

    assert len(received) == 1
    outcome = received[0]
    assert outcome.eliminated_id == imposter.id
    assert outcome.winning_team == Team.CIVILIANS
    assert imposter.name in outcome.losers


def test_second_round_rebuilds_roles(make_session, start_round, reveal_all):
    session, ids = make_session(seed=7)
    start_round(session)
    reveal_all(session)
    session.start_discussion()
    session.skip_voting()
    session.new_round()

    start_round(session, "single")
    assert session.state.round_number == 2
    assert session.state.artifacts.secret_word == "Kettle"
    assert session.state.count_role(Role.IMPOSTER) == 1
    assert not any(p.has_seen_card for p in session.state.players)
    assert sorted(p.id for p in session.state.players) == sorted(ids)


def test_full_reset(make_session, start_round):
    session, _ = make_session(imposter_count=2)
    start_round(session)

    assert session.full_reset().ok
    assert session.phase == Phase.SETUP
    assert session.state.players == []
    assert session.state.round_number == 0


def test_snapshot_is_isolated(make_session):
    session, _ = make_session()
    snap = session.snapshot()
    snap.players.clear()

    assert session.state.player_count == 4


def test_logger_keeps_roles_private(make_session, start_round, reveal_all):
    logger = GameLogger()
    session, _ = make_session(logger=logger)
    start_round(session)
    reveal_all(session)

    public = logger.get_entries()
    assert all(e.event_type != EventType.ROLE_ASSIGNMENT for e in public)
    assert len(logger.get_entries(event_type=EventType.ROLE_ASSIGNMENT, include_private=True)) == 1
    assert len(logger.get_entries(event_type=EventType.CARD_ACKNOWLEDGED)) == 4
    phases = [e.data["new_phase"] for e in logger.get_entries(event_type=EventType.PHASE_CHANGE)]
    assert phases[:3] == ["category", "passing", "reveal"]
    assert phases[-1] == "starter"

    session.add_player("Late")
    warnings = logger.get_entries(event_type=EventType.WARNING)
    assert warnings[-1].data["reason"] == "PHASE_VIOLATION"


def test_state_dict_hides_roles_until_asked(make_session, start_round):
    session, _ = make_session()
    start_round(session)

    public = session.state.to_dict()
    assert public["phase"] == "passing"
    assert all("role" not in p for p in public["players"])
    assert "secret_word" not in public

    full = session.state.to_dict(include_roles=True)
    assert {p["role"] for p in full["players"]} >= {"imposter", "civilian"}
    assert full["secret_word"] in ("Apple", "Lemon", "Grape")


def test_out_of_phase_intents_during_passing(make_session, start_round):
    session, _ = make_session()
    start_round(session)
    before = session.snapshot()

    card = session.current_card()
    seen = session.mark_current_player_seen()
    added = session.add_player("Eve")

    assert card.ok is False and card.payload is None
    assert seen.reason == FailureReason.PHASE_VIOLATION
    assert added.reason == FailureReason.PHASE_VIOLATION
    assert [p.has_seen_card for p in session.state.players] == [False] * 4
    assert session.state.player_count == 4
    assert session.snapshot() == before


def test_vote_and_reveal_rejected_in_setup(make_session):
    session, ids = make_session()

    assert session.submit_vote(ids[0], ids[1]).reason == FailureReason.PHASE_VIOLATION
    assert session.request_reveal().reason == FailureReason.PHASE_VIOLATION
    assert session.state.artifacts.votes == {}
    assert session.phase == Phase.SETUP
    assert session.phase_history == []
