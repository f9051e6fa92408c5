import random

import pytest

from passplay.catalog import Category, InMemoryCatalog, WordPair
from passplay.environments.imposter import ImposterSession, ImposterSettings, Phase, Player


class ForcedCoinRandom(random.Random):
    """Random source whose ``random()`` always returns ``coin``.

    Shuffles and choices still come from the seeded generator, so only the
    troll coin is forced.
    """

    def __init__(self, coin, seed=0):
        self.coin = coin
        super().__init__(seed)

    def random(self):
        return self.coin

    # Keeps _randbelow on getrandbits so shuffles and choices ignore the forced coin
    def getrandbits(self, k):
        return super().getrandbits(k)


@pytest.fixture
def catalog():
    return InMemoryCatalog(
        categories=[
            Category(
                id="fruit",
                name="Fruit",
                word_pairs=[WordPair("Apple", "Pear"), WordPair("Lemon", "Lime"), WordPair("Grape")],
            ),
            Category(
                id="single",
                name="Single",
                word_pairs=[WordPair("Kettle"), WordPair("Kettle"), WordPair("Kettle")],
            ),
        ],
        troll_words=["Kazoo", "Tuba"],
    )


@pytest.fixture
def fruit(catalog):
    return catalog.get_category("fruit")


@pytest.fixture
def make_players():
    def _make(names):
        return [Player(id=name.lower(), name=name) for name in names]
    return _make


@pytest.fixture
def make_session(catalog):
    """Build a session with a roster; returns (session, player_ids)."""
    def _make(names=("A", "B", "C", "D"), seed=0, rng=None, logger=None, **settings):
        session = ImposterSession(
            catalog=catalog,
            settings=ImposterSettings(**settings),
            rng=rng or random.Random(seed),
            logger=logger,
        )
        ids = [session.add_player(name).payload for name in names]
        return session, ids
    return _make


@pytest.fixture
def start_round():
    def _start(session, category_id="fruit"):
        assert session.proceed_to_category().ok
        assert session.select_category(category_id).ok
        assert session.start_game().ok
    return _start


@pytest.fixture
def reveal_all():
    """Walk every player through the reveal loop."""
    def _reveal(session):
        while session.phase in (Phase.PASSING, Phase.REVEAL):
            if session.phase == Phase.PASSING:
                assert session.request_reveal().ok
            else:
                assert session.mark_current_player_seen().ok
    return _reveal


@pytest.fixture
def forced_coin():
    """Factory for a random source with a fixed troll coin."""
    def _make(coin, seed=0):
        return ForcedCoinRandom(coin, seed=seed)
    return _make
