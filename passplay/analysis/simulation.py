"""Automated play-through of Imposter rounds.

Stands in for a table of humans: every player acknowledges their card and
then votes for a random other player.
"""

import random
from typing import List, Optional

from passplay.core.exceptions import InvalidStateError
from passplay.environments.imposter.session import ImposterSession
from passplay.environments.imposter.types import Phase, RoundOutcome


def play_random_round(
    session: ImposterSession,
    category_id: str,
    rng: Optional[random.Random] = None,
    skip_vote: bool = False,
) -> RoundOutcome:
    """Play one round from setup to results.
    
    Args:
        session: Session in the setup phase with at least three players
        category_id: Category to play
        rng: Random source for the ballots (defaults to the session's)
        skip_vote: Skip the ballot instead of voting
        
    Returns:
        The round's outcome
        
    Raises:
        InvalidStateError: If an intent is rejected along the way
    """
    rng = rng or session.rng
    
    _expect(session.proceed_to_category())
    _expect(session.select_category(category_id))
    _expect(session.start_game())
    
    while session.phase in (Phase.PASSING, Phase.REVEAL):
        if session.phase == Phase.PASSING:
            _expect(session.request_reveal())
        else:
            _expect(session.current_card())
            _expect(session.mark_current_player_seen())
    
    _expect(session.start_discussion())
    
    if skip_vote:
        _expect(session.skip_voting())
    else:
        _expect(session.go_to_voting())
        while session.phase == Phase.VOTING:
            voter = session.next_voter()
            suspects = [p for p in session.state.players if p.id != voter.id]
            _expect(session.submit_vote(voter.id, rng.choice(suspects).id))
    
    outcome = session.state.outcome
    _expect(session.new_round())
    return outcome


def play_random_rounds(
    session: ImposterSession,
    category_ids: List[str],
    n_rounds: int,
    rng: Optional[random.Random] = None,
) -> List[RoundOutcome]:
    """Play ``n_rounds`` rounds, cycling through ``category_ids``."""
    outcomes = []
    for i in range(n_rounds):
        category_id = category_ids[i % len(category_ids)]
        outcomes.append(play_random_round(session, category_id, rng=rng))
    return outcomes


def _expect(result) -> None:
    if not result.ok:
        raise InvalidStateError(
            f"Simulation intent rejected: {result.message}",
            details={"reason": result.reason.name if result.reason else None}
        )
