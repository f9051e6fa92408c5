"""Phase transition table for the Imposter word game."""

from typing import Dict, FrozenSet

from passplay.environments.imposter.types import Phase


TRANSITIONS: Dict[Phase, FrozenSet[Phase]] = {
    Phase.SETUP: frozenset({Phase.CATEGORY}),
    Phase.CATEGORY: frozenset({Phase.SETUP, Phase.PASSING}),
    Phase.PASSING: frozenset({Phase.REVEAL}),
    Phase.REVEAL: frozenset({Phase.PASSING, Phase.STARTER}),
    Phase.STARTER: frozenset({Phase.PLAYING}),
    Phase.PLAYING: frozenset({Phase.VOTING, Phase.RESULTS}),
    Phase.VOTING: frozenset({Phase.RESULTS}),
    Phase.RESULTS: frozenset({Phase.SETUP}),
}

# Phases in which the roster and settings may be edited
EDITABLE_PHASES = (Phase.SETUP,)
SETTINGS_PHASES = (Phase.SETUP, Phase.CATEGORY)
