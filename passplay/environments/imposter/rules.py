"""Game rules and logic for the Imposter word game.

Everything here is a pure function of its inputs plus an explicit random
source, so a test harness can replay any round with a seeded
``random.Random``.
"""

import random
from typing import Dict, List, Optional, Sequence, Tuple

from passplay.catalog.types import Category
from passplay.core.exceptions import CatalogError, InvalidStateError
from passplay.environments.imposter.config import (
    TROLL_PROBABILITY,
    ImposterSettings,
    max_imposters,
)
from passplay.environments.imposter.types import (
    IMPOSTER_SIDE,
    CardView,
    Player,
    Role,
    RoleAssignment,
    RoundArtifacts,
    RoundOutcome,
    Team,
    VoteTally,
)


def effective_imposter_count(n_players: int, requested: int) -> int:
    """Clamp the requested imposter count to ``[1, floor(n / 2)]``."""
    return max(1, min(requested, max_imposters(n_players)))


def assign_roles(
    players: Sequence[Player],
    settings: ImposterSettings,
    category: Category,
    troll_words: Sequence[str],
    rng: random.Random,
) -> RoleAssignment:
    """Assign roles and draw the round's words.
    
    Steps, in the order random draws are made:
    troll coin (and troll word), word pair, role permutation, pass order.
    The confused word collapses to the secret word unless the confused
    role is enabled.
    
    Args:
        players: Roster in its stable order (not modified)
        settings: Session settings
        category: Category to draw the word pair from
        troll_words: Pool for troll rounds
        rng: Random number generator
        
    Returns:
        RoleAssignment with fresh Player objects in pass-around order
        
    Raises:
        CatalogError: If the category has no word pairs
        InvalidStateError: If the roster is empty
    """
    n_players = len(players)
    if n_players == 0:
        raise InvalidStateError("Cannot assign roles to an empty roster")
    if not category.word_pairs:
        raise CatalogError(f"Category '{category.id}' has no words")
    
    # An empty troll pool cannot produce a troll word, so no troll round
    is_troll_round = False
    troll_word = None
    if settings.troll_mode and troll_words:
        is_troll_round = rng.random() < TROLL_PROBABILITY
        if is_troll_round:
            troll_word = rng.choice(list(troll_words))
    
    pair = rng.choice(category.word_pairs)
    
    imposter_count = effective_imposter_count(n_players, settings.imposter_count)
    
    permutation = list(range(n_players))
    rng.shuffle(permutation)
    
    roles: Dict[int, Role] = {i: Role.CIVILIAN for i in range(n_players)}
    for index in permutation[:imposter_count]:
        roles[index] = Role.IMPOSTER
    
    civilian_pool = permutation[imposter_count:]
    special_roles = [
        (Role.JESTER, settings.jester_enabled),
        (Role.CONFUSED, settings.confused_enabled),
        (Role.ACCOMPLICE, settings.accomplice_enabled),
    ]
    for role, enabled in special_roles:
        if enabled and civilian_pool:
            roles[civilian_pool.pop(0)] = role
    
    if is_troll_round:
        roles = {i: Role.IMPOSTER for i in range(n_players)}
    
    annotated = [
        Player(id=p.id, name=p.name, role=roles[i], has_seen_card=False)
        for i, p in enumerate(players)
    ]
    
    # Roster order, not permutation order: with several imposters the
    # accomplice only ever learns about the first one listed.
    imposter_name = next((p.name for p in annotated if p.is_imposter), None)
    
    pass_order = list(annotated)
    rng.shuffle(pass_order)
    
    artifacts = RoundArtifacts(
        secret_word=pair.word_a,
        confused_word=pair.twin if settings.confused_enabled else pair.word_a,
        is_troll_round=is_troll_round,
        troll_word=troll_word,
        round_starter_name=None,
        imposter_name=imposter_name,
        category_name=category.name,
    )
    return RoleAssignment(
        players=pass_order,
        artifacts=artifacts,
        effective_imposter_count=n_players if is_troll_round else imposter_count,
    )


def starter_pool(
    players: Sequence[Player],
    settings: ImposterSettings,
    is_troll_round: bool,
) -> List[Player]:
    """Players eligible to speak first.
    
    Imposters are excluded when ``imposter_never_starts`` is set, except in
    troll rounds. An exclusion that would empty the pool falls back to the
    full roster.
    """
    if settings.imposter_never_starts and not is_troll_round:
        eligible = [p for p in players if not p.is_imposter]
        if eligible:
            return eligible
    return list(players)


def choose_round_starter(
    players: Sequence[Player],
    settings: ImposterSettings,
    is_troll_round: bool,
    rng: random.Random,
) -> Player:
    """Pick the round starter uniformly from the eligible pool."""
    pool = starter_pool(players, settings, is_troll_round)
    if not pool:
        raise InvalidStateError("Cannot choose a round starter from an empty roster")
    return rng.choice(pool)


def validate_vote(
    players: Sequence[Player],
    votes: Dict[str, str],
    voter_id: str,
    suspect_id: str,
) -> Tuple[bool, str]:
    """Validate a ballot.
    
    Args:
        players: Current roster
        votes: Votes already cast this round
        voter_id: Player casting the vote
        suspect_id: Player being voted for
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    ids = {p.id for p in players}
    
    if voter_id not in ids:
        return False, f"Unknown voter {voter_id}"
    
    if suspect_id not in ids:
        return False, f"Unknown suspect {suspect_id}"
    
    if voter_id == suspect_id:
        return False, "Cannot vote for yourself"
    
    if voter_id in votes:
        return False, "Player has already voted this round"
    
    return True, ""


def tally_votes(players: Sequence[Player], votes: Dict[str, str]) -> VoteTally:
    """Count votes and pick the eliminated player.
    
    The eliminated player is the first one, in roster order, whose count
    equals the maximum. Ties therefore go to whoever is listed first, and a
    ballot with no votes at all still names the first player (with zero
    votes); ``VoteTally.decisive`` tells the two cases apart.
    
    Args:
        players: Roster in the engine's order
        votes: Mapping voter_id -> suspect_id
        
    Returns:
        VoteTally
    """
    if not players:
        raise InvalidStateError("Cannot tally votes for an empty roster")
    
    counts = {p.id: 0 for p in players}
    for suspect_id in votes.values():
        if suspect_id in counts:
            counts[suspect_id] += 1
    
    max_votes = max(counts.values())
    eliminated = next(p for p in players if counts[p.id] == max_votes)
    
    return VoteTally(
        counts=counts,
        max_votes=max_votes,
        eliminated_id=eliminated.id,
        eliminated_name=eliminated.name,
        eliminated_role=eliminated.role,
        imposter_caught=eliminated.role in IMPOSTER_SIDE,
    )


def classify_outcome(
    round_number: int,
    players: Sequence[Player],
    artifacts: RoundArtifacts,
    tally: Optional[VoteTally],
) -> RoundOutcome:
    """Decide who won the round.
    
    - Jester voted out: the jester alone wins.
    - Imposter or accomplice voted out: civilians (and the confused player) win.
    - Anyone else voted out: the imposter side wins.
    
    Skipped votes, ballots where nobody received a vote, and troll rounds
    have no winning team.
    """
    roles = {p.name: p.role for p in players}
    
    if tally is None:
        return RoundOutcome(
            round_number=round_number,
            skipped=True,
            is_troll_round=artifacts.is_troll_round,
            roles=roles,
        )
    
    winning_team = None
    if tally.decisive and not artifacts.is_troll_round:
        if tally.eliminated_role == Role.JESTER:
            winning_team = Team.JESTER
        elif tally.imposter_caught:
            winning_team = Team.CIVILIANS
        else:
            winning_team = Team.IMPOSTERS
    
    winners: List[str] = []
    losers: List[str] = []
    if winning_team is not None:
        for p in players:
            if _team_of(p.role) == winning_team:
                winners.append(p.name)
            else:
                losers.append(p.name)
    
    return RoundOutcome(
        round_number=round_number,
        skipped=False,
        is_troll_round=artifacts.is_troll_round,
        eliminated_id=tally.eliminated_id,
        eliminated_name=tally.eliminated_name,
        vote_counts=dict(tally.counts),
        imposter_caught=tally.imposter_caught,
        winning_team=winning_team,
        winners=winners,
        losers=losers,
        roles=roles,
    )


def _team_of(role: Role) -> Team:
    if role in IMPOSTER_SIDE:
        return Team.IMPOSTERS
    if role == Role.JESTER:
        return Team.JESTER
    return Team.CIVILIANS


def build_card_view(
    player: Player,
    artifacts: RoundArtifacts,
    settings: ImposterSettings,
    category_name: Optional[str],
) -> CardView:
    """Build the private card for one player.
    
    Args:
        player: Player whose card is shown
        artifacts: Current round artifacts
        settings: Session settings (for the imposter hint)
        category_name: Name of the round's category
        
    Returns:
        CardView holding only what this player may see
    """
    if artifacts.is_troll_round:
        return CardView(
            player_id=player.id,
            player_name=player.name,
            shown_role=None,
            word=artifacts.troll_word,
            is_troll_round=True,
        )
    
    if player.role == Role.IMPOSTER:
        return CardView(
            player_id=player.id,
            player_name=player.name,
            shown_role=Role.IMPOSTER,
            category_hint=category_name if settings.imposter_hint else None,
        )
    
    if player.role == Role.JESTER:
        return CardView(
            player_id=player.id,
            player_name=player.name,
            shown_role=Role.JESTER,
            category_hint=category_name,
        )
    
    if player.role == Role.CONFUSED:
        # Confused players must not learn that their word is the twin
        return CardView(
            player_id=player.id,
            player_name=player.name,
            shown_role=Role.CIVILIAN,
            word=artifacts.confused_word,
        )
    
    if player.role == Role.ACCOMPLICE:
        return CardView(
            player_id=player.id,
            player_name=player.name,
            shown_role=Role.ACCOMPLICE,
            word=artifacts.secret_word,
            partner_name=artifacts.imposter_name,
        )
    
    return CardView(
        player_id=player.id,
        player_name=player.name,
        shown_role=Role.CIVILIAN,
        word=artifacts.secret_word,
    )
