import pytest

from passplay.core.exceptions import InvalidStateError
from passplay.environments.imposter import Player, Role, RoundArtifacts, Team
from passplay.environments.imposter.rules import classify_outcome, tally_votes, validate_vote


@pytest.fixture
def roster():
    return [
        Player(id="a", name="A", role=Role.CIVILIAN),
        Player(id="b", name="B", role=Role.JESTER),
        Player(id="c", name="C", role=Role.IMPOSTER),
        Player(id="d", name="D", role=Role.ACCOMPLICE),
    ]


def test_scenario_unanimous_vote(roster):
    tally = tally_votes(roster, {"a": "c", "b": "c", "d": "c"})

    assert tally.counts == {"a": 0, "b": 0, "c": 3, "d": 0}
    assert tally.max_votes == 3
    assert tally.eliminated_id == "c"
    assert tally.eliminated_name == "C"
    assert tally.imposter_caught is True
    assert tally.decisive is True


def test_scenario_no_votes_eliminates_first_in_roster(roster):
    tally = tally_votes(roster, {})

    assert tally.counts == {"a": 0, "b": 0, "c": 0, "d": 0}
    assert tally.max_votes == 0
    assert tally.eliminated_id == "a"
    assert tally.decisive is False


def test_tie_goes_to_first_in_roster_order(roster):
    tally = tally_votes(roster, {"a": "d", "b": "c", "c": "d", "d": "c"})

    assert tally.counts["c"] == tally.counts["d"] == 2
    assert tally.eliminated_id == "c"
    assert tally.tied is True


def test_tie_break_follows_roster_not_vote_order(roster):
    reordered = [roster[3], roster[2], roster[1], roster[0]]
    tally = tally_votes(reordered, {"a": "c", "b": "d"})

    assert tally.eliminated_id == "d"


def test_accomplice_counts_as_caught(roster):
    tally = tally_votes(roster, {"a": "d", "b": "d", "c": "a"})
    assert tally.eliminated_id == "d"
    assert tally.imposter_caught is True


def test_jester_is_not_caught(roster):
    tally = tally_votes(roster, {"a": "b", "c": "b", "d": "b"})
    assert tally.eliminated_role == Role.JESTER
    assert tally.imposter_caught is False


def test_votes_for_unknown_players_are_ignored(roster):
    tally = tally_votes(roster, {"a": "ghost", "b": "c"})
    assert sum(tally.counts.values()) == 1
    assert "ghost" not in tally.counts


def test_empty_roster_raises():
    with pytest.raises(InvalidStateError):
        tally_votes([], {})


@pytest.mark.parametrize("voter,suspect,votes,message", [
    ("x", "a", {}, "Unknown voter"),
    ("a", "x", {}, "Unknown suspect"),
    ("a", "a", {}, "yourself"),
    ("a", "b", {"a": "c"}, "already voted"),
])
def test_validate_vote_rejections(roster, voter, suspect, votes, message):
    is_valid, error = validate_vote(roster, votes, voter, suspect)
    assert is_valid is False
    assert message in error


def test_validate_vote_accepts(roster):
    assert validate_vote(roster, {"b": "c"}, "a", "c") == (True, "")


def test_outcome_civilians_win_when_imposter_caught(roster):
    tally = tally_votes(roster, {"a": "c", "b": "c", "d": "a"})
    outcome = classify_outcome(1, roster, RoundArtifacts(), tally)

    assert outcome.winning_team == Team.CIVILIANS
    assert outcome.winners == ["A"]
    assert set(outcome.losers) == {"B", "C", "D"}
    assert outcome.eliminated_name == "C"


def test_outcome_jester_wins_when_voted_out(roster):
    tally = tally_votes(roster, {"a": "b", "c": "b", "d": "b"})
    outcome = classify_outcome(1, roster, RoundArtifacts(), tally)

    assert outcome.winning_team == Team.JESTER
    assert outcome.winners == ["B"]


def test_outcome_imposters_win_when_civilian_voted_out(roster):
    tally = tally_votes(roster, {"b": "a", "c": "a", "d": "a"})
    outcome = classify_outcome(1, roster, RoundArtifacts(), tally)

    assert outcome.winning_team == Team.IMPOSTERS
    assert outcome.winners == ["C", "D"]


def test_confused_player_wins_with_civilians():
    players = [
        Player(id="a", name="A", role=Role.CONFUSED),
        Player(id="b", name="B", role=Role.CIVILIAN),
        Player(id="c", name="C", role=Role.IMPOSTER),
    ]
    tally = tally_votes(players, {"a": "c", "b": "c"})
    outcome = classify_outcome(2, players, RoundArtifacts(), tally)

    assert outcome.winners == ["A", "B"]
    assert outcome.round_number == 2


def test_outcome_skipped_vote_has_no_winner(roster):
    outcome = classify_outcome(3, roster, RoundArtifacts(), None)

    assert outcome.skipped is True
    assert outcome.winning_team is None
    assert outcome.eliminated_id is None
    assert outcome.roles["C"] == Role.IMPOSTER


def test_outcome_without_votes_has_no_winner(roster):
    outcome = classify_outcome(1, roster, RoundArtifacts(), tally_votes(roster, {}))

    assert outcome.skipped is False
    assert outcome.eliminated_name == "A"
    assert outcome.winning_team is None
    assert outcome.winners == []


def test_outcome_troll_round_has_no_winner():
    players = [Player(id=i, name=i.upper(), role=Role.IMPOSTER) for i in "abc"]
    tally = tally_votes(players, {"a": "b", "c": "b"})
    outcome = classify_outcome(1, players, RoundArtifacts(is_troll_round=True, troll_word="Kazoo"), tally)

    assert outcome.is_troll_round is True
    assert outcome.imposter_caught is True
    assert outcome.winning_team is None


def test_outcome_to_dict(roster):
    tally = tally_votes(roster, {"a": "c"})
    data = classify_outcome(1, roster, RoundArtifacts(), tally).to_dict()

    assert data["winning_team"] == "civilians"
    assert data["roles"]["B"] == "jester"
    assert data["vote_counts"]["c"] == 1
