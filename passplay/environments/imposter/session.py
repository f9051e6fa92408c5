"""Imposter session: the phase controller the UI layer talks to."""

import copy
import random
from typing import Any, Callable, List, Optional

from passplay.catalog.base import RoleCatalog
from passplay.catalog.memory import InMemoryCatalog
from passplay.core.base_session import BaseSession
from passplay.core.exceptions import CatalogError, ConfigurationError
from passplay.core.types import FailureReason, IntentResult
from passplay.core.utils import generate_id
from passplay.environments.imposter.config import MIN_PLAYERS, ImposterSettings
from passplay.environments.imposter.phases import EDITABLE_PHASES, SETTINGS_PHASES, TRANSITIONS
from passplay.environments.imposter.rules import (
    assign_roles,
    build_card_view,
    choose_round_starter,
    classify_outcome,
    tally_votes,
    validate_vote,
)
from passplay.environments.imposter.state import SessionState
from passplay.environments.imposter.types import Phase, Player, RoundOutcome, VoteTally
from passplay.logging.formats import EventType


OutcomeListener = Callable[[RoundOutcome], None]


class ImposterSession(BaseSession):
    """Single shared-device Imposter session.

    Every intent returns an ``IntentResult``. A rejected intent leaves the
    state untouched, so the UI can simply re-render and show the message.
    """

    TRANSITIONS = TRANSITIONS

    def __init__(
        self,
        catalog: Optional[RoleCatalog] = None,
        settings: Optional[ImposterSettings] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        logger=None,
        session_id: Optional[str] = None,
    ):
        """Initialize Imposter session.

        Args:
            catalog: Source of categories and troll words (defaults to the built-in list)
            settings: Initial settings
            rng: Random source (inject a seeded one for reproducible rounds)
            seed: Seed for a fresh random source
            logger: Optional GameLogger instance
            session_id: Optional session ID
        """
        self.catalog = catalog or InMemoryCatalog()
        self.initial_settings = settings or ImposterSettings()
        self._outcome_listeners: List[OutcomeListener] = []
        super().__init__(rng=rng, seed=seed, logger=logger, session_id=session_id)

        if self.logger:
            self.logger.log_session_start(self.state.settings.to_dict())

    def reset(self) -> None:
        """Reset to an empty roster with the initial settings."""
        self.state = SessionState(settings=self.initial_settings)
        self.phase_history = []

    def snapshot(self) -> SessionState:
        """Deep copy of the current state; mutating it has no effect."""
        return self.state.copy()

    @property
    def current_player(self) -> Optional[Player]:
        player = self.state.current_player
        return copy.copy(player) if player else None

    @property
    def discussion_seconds(self) -> Optional[int]:
        return self.state.settings.discussion_seconds

    def next_voter(self) -> Optional[Player]:
        """First player in pass order who still has to vote."""
        if self.state.phase != Phase.VOTING:
            return None
        pending = self.state.pending_voters()
        return copy.copy(pending[0]) if pending else None

    def current_card(self) -> IntentResult:
        """Card of the player currently holding the device.

        Only available during ``reveal``, and only for the current player,
        so a card can never be rendered for anyone else.
        """
        rejected = self._require_phase("current_card", Phase.REVEAL)
        if rejected is not None:
            return rejected

        player = self.state.current_player
        card = build_card_view(
            player,
            self.state.artifacts,
            self.state.settings,
            self.state.artifacts.category_name,
        )
        self._log(EventType.CARD_VIEWED, {"card": card.to_dict()}, player_id=player.id, is_private=True)
        return IntentResult.success(payload=card)

    def add_outcome_listener(self, listener: OutcomeListener) -> None:
        """Register a callback that receives every finished round's outcome."""
        self._outcome_listeners.append(listener)

    def add_player(self, name: str) -> IntentResult:
        """Add a player to the roster; the payload is the new player's id."""
        rejected = self._require_phase("add_player", *EDITABLE_PHASES)
        if rejected is not None:
            return rejected

        clean = (name or "").strip()
        if not clean:
            return self._reject("add_player", FailureReason.INVALID_PLAYER_NAME, "Player name must not be empty")
        if any(p.name.lower() == clean.lower() for p in self.state.players):
            return self._reject(
                "add_player",
                FailureReason.INVALID_PLAYER_NAME,
                f"A player named '{clean}' is already in the game"
            )

        player = Player(id=generate_id(), name=clean)
        self.state.players.append(player)
        self._log(EventType.PLAYER_ADDED, {"name": clean}, player_id=player.id)
        return IntentResult.success(payload=player.id)

    def remove_player(self, player_id: str) -> IntentResult:
        rejected = self._require_phase("remove_player", *EDITABLE_PHASES)
        if rejected is not None:
            return rejected

        player = self.state.get_player(player_id)
        if player is None:
            return self._reject("remove_player", FailureReason.UNKNOWN_PLAYER, f"Unknown player {player_id}")

        self.state.players = [p for p in self.state.players if p.id != player_id]
        self._log(EventType.PLAYER_REMOVED, {"name": player.name}, player_id=player_id)
        return IntentResult.success()

    def update_settings(self, **partial: Any) -> IntentResult:
        """Apply a partial settings update (snake_case or camelCase keys)."""
        rejected = self._require_phase("update_settings", *SETTINGS_PHASES)
        if rejected is not None:
            return rejected

        try:
            settings = self.state.settings.merge(partial)
        except ConfigurationError as e:
            return self._reject("update_settings", FailureReason.INVALID_SETTINGS, str(e))

        self.state.settings = settings
        self._log(EventType.SETTINGS_UPDATED, {"settings": settings.to_dict()})
        return IntentResult.success(payload=settings)

    def proceed_to_category(self) -> IntentResult:
        rejected = self._require_phase("proceed_to_category", Phase.SETUP)
        if rejected is not None:
            return rejected
        if self.state.player_count < MIN_PLAYERS:
            return self._insufficient_players("proceed_to_category")

        self._transition(Phase.CATEGORY)
        return IntentResult.success()

    def return_to_setup(self) -> IntentResult:
        """Navigate back from category selection to setup."""
        rejected = self._require_phase("return_to_setup", Phase.CATEGORY)
        if rejected is not None:
            return rejected

        self.state.reset_round()
        self._transition(Phase.SETUP)
        return IntentResult.success()

    def select_category(self, category_id: str) -> IntentResult:
        rejected = self._require_phase("select_category", Phase.CATEGORY)
        if rejected is not None:
            return rejected
        if not self.catalog.has_category(category_id):
            return self._reject(
                "select_category",
                FailureReason.UNKNOWN_CATEGORY,
                f"Category '{category_id}' not found"
            )

        self.state.selected_category_id = category_id
        self._log(EventType.CATEGORY_SELECTED, {"category_id": category_id})
        return IntentResult.success()

    def start_game(self) -> IntentResult:
        """Assign roles, draw the words and hand the device to the first player."""
        rejected = self._require_phase("start_game", Phase.CATEGORY)
        if rejected is not None:
            return rejected
        if self.state.player_count < MIN_PLAYERS:
            return self._insufficient_players("start_game")
        if not self.state.selected_category_id:
            return self._reject("start_game", FailureReason.NO_CATEGORY_SELECTED, "Choose a category first")

        try:
            category = self.catalog.get_category(self.state.selected_category_id)
            assignment = assign_roles(
                self.state.players,
                self.state.settings,
                category,
                self.catalog.get_troll_words(),
                self.rng,
            )
        except CatalogError as e:
            return self._reject("start_game", FailureReason.UNKNOWN_CATEGORY, e.message)

        self.state.players = assignment.players
        self.state.artifacts = assignment.artifacts
        self.state.current_player_index = 0
        self.state.vote_result = None
        self.state.outcome = None
        self.state.round_number += 1

        if self.logger:
            self.logger.log_round_start(
                self.state.round_number,
                {"category_id": category.id, "n_players": self.state.player_count}
            )
            self.logger.log(
                EventType.ROLE_ASSIGNMENT,
                {
                    "roles": {p.name: p.role.value for p in assignment.players},
                    "pass_order": [p.name for p in assignment.players],
                    "secret_word": assignment.artifacts.secret_word,
                    "confused_word": assignment.artifacts.confused_word,
                    "is_troll_round": assignment.artifacts.is_troll_round,
                    "troll_word": assignment.artifacts.troll_word,
                    "imposter_name": assignment.artifacts.imposter_name,
                },
                is_private=True
            )

        self._transition(Phase.PASSING)
        return IntentResult.success()

    def request_reveal(self) -> IntentResult:
        """The player holding the device asks to see their card."""
        rejected = self._require_phase("request_reveal", Phase.PASSING)
        if rejected is not None:
            return rejected

        self._transition(Phase.REVEAL)
        return IntentResult.success()

    def hide_card(self) -> IntentResult:
        """Hide the card without acknowledging it."""
        rejected = self._require_phase("hide_card", Phase.REVEAL)
        if rejected is not None:
            return rejected

        self._transition(Phase.PASSING)
        return IntentResult.success()

    def mark_current_player_seen(self) -> IntentResult:
        """Acknowledge the current card and pass the device on.

        After the last player the round starter is drawn and the session
        moves to ``starter``.
        """
        rejected = self._require_phase("mark_current_player_seen", Phase.REVEAL)
        if rejected is not None:
            return rejected

        player = self.state.current_player
        player.has_seen_card = True
        self._log(EventType.CARD_ACKNOWLEDGED, {"name": player.name}, player_id=player.id)

        next_index = self.state.current_player_index + 1
        if next_index < self.state.player_count:
            self.state.current_player_index = next_index
            self._transition(Phase.PASSING)
            return IntentResult.success()

        starter = choose_round_starter(
            self.state.players,
            self.state.settings,
            self.state.artifacts.is_troll_round,
            self.rng,
        )
        self.state.artifacts.round_starter_name = starter.name
        self.state.current_player_index = 0
        self._log(EventType.ROUND_STARTER, {"name": starter.name}, player_id=starter.id)
        self._transition(Phase.STARTER)
        return IntentResult.success(payload=starter.name)

    def start_discussion(self) -> IntentResult:
        rejected = self._require_phase("start_discussion", Phase.STARTER)
        if rejected is not None:
            return rejected

        self._transition(Phase.PLAYING)
        return IntentResult.success(payload=self.discussion_seconds)

    def go_to_voting(self) -> IntentResult:
        rejected = self._require_phase("go_to_voting", Phase.PLAYING)
        if rejected is not None:
            return rejected

        self.state.artifacts.votes = {}
        self._transition(Phase.VOTING)
        return IntentResult.success()

    def skip_voting(self) -> IntentResult:
        """Go straight to results with no tally and no elimination."""
        rejected = self._require_phase("skip_voting", Phase.PLAYING, Phase.VOTING)
        if rejected is not None:
            return rejected

        self.state.artifacts.votes = {}
        self.state.vote_result = None
        self._log(EventType.VOTE_SKIPPED, {"round": self.state.round_number})
        self._transition(Phase.RESULTS)
        self._finish_round(None)
        return IntentResult.success()

    def submit_vote(self, voter_id: str, suspect_id: str) -> IntentResult:
        """Record one ballot.

        A second vote from the same voter is rejected. When the last player
        has voted the ballot is tallied and the session moves to results;
        the payload is then the ``VoteTally``.
        """
        rejected = self._require_phase("submit_vote", Phase.VOTING)
        if rejected is not None:
            return rejected

        is_valid, error = validate_vote(self.state.players, self.state.artifacts.votes, voter_id, suspect_id)
        if not is_valid:
            return self._reject("submit_vote", FailureReason.INVALID_VOTE, error)

        self.state.artifacts.votes[voter_id] = suspect_id
        self._log(EventType.VOTE_CAST, {"suspect_id": suspect_id}, player_id=voter_id, is_private=True)

        if self.state.all_voted():
            return IntentResult.success(payload=self._close_ballot())
        return IntentResult.success()

    def reveal_results(self) -> IntentResult:
        """Close the ballot early; players who have not voted abstain."""
        rejected = self._require_phase("reveal_results", Phase.VOTING)
        if rejected is not None:
            return rejected

        return IntentResult.success(payload=self._close_ballot())

    def new_round(self) -> IntentResult:
        """Back to setup with the same roster and settings."""
        rejected = self._require_phase("new_round", Phase.RESULTS)
        if rejected is not None:
            return rejected

        self.state.reset_round()
        self.state.selected_category_id = None
        self._transition(Phase.SETUP)
        return IntentResult.success()

    def full_reset(self) -> IntentResult:
        """Forget everything, including the roster and settings."""
        self.reset()
        self._log(EventType.SESSION_RESET, {})
        if self.logger:
            self.logger.current_round = 0
        return IntentResult.success()

    def _insufficient_players(self, intent: str) -> IntentResult:
        missing = MIN_PLAYERS - self.state.player_count
        return self._reject(
            intent,
            FailureReason.INSUFFICIENT_PLAYERS,
            f"Need at least {MIN_PLAYERS} players ({missing} more)"
        )

    def _close_ballot(self) -> VoteTally:
        tally = tally_votes(self.state.players, self.state.artifacts.votes)
        self.state.vote_result = tally
        self._log(EventType.VOTE_TALLY, tally.to_dict())
        if tally.decisive:
            self._log(
                EventType.PLAYER_ELIMINATED,
                {"name": tally.eliminated_name, "votes": tally.max_votes},
                player_id=tally.eliminated_id
            )
        self._transition(Phase.RESULTS)
        self._finish_round(tally)
        return tally

    def _finish_round(self, tally: Optional[VoteTally]) -> None:
        outcome = classify_outcome(
            self.state.round_number,
            self.state.players,
            self.state.artifacts,
            tally,
        )
        self.state.outcome = outcome
        if self.logger:
            self.logger.log_round_end(outcome.to_dict())
        for listener in self._outcome_listeners:
            listener(outcome)
