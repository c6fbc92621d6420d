"""
Testing in-memory store
- Create games, make guesses, restart and discard them.
- What the store hands back is a snapshot, never a live session.
"""

import threading

import pytest

from codebreaker.errors import InvalidGuessLength
from codebreaker.store import SessionStore


def test_store_create_and_guess_basic(scripted):
    store = SessionStore()

    # Secret is scripted so we know what outcome should be: "BCDE"
    game = store.create("ABCDEF", 4, scripted([1, 2, 3, 4]))
    assert game.pool == "ABCDEF"
    assert game.length == 4
    assert game.guess_count == 0
    assert game.solved is False

    # Wrong guess, same length -> history increments
    result = store.guess(game.game_id, "AAAA")
    assert (result.scored.correct_count, result.scored.close_count) == (0, 0)
    assert result.game.guess_count == 1
    assert result.already_solved is False
    assert result.game.solved is False

    # Winning guess
    result = store.guess(game.game_id, "BCDE")
    assert result.scored.correct_count == 4
    assert result.game.guess_count == 2
    assert result.game.solved is True
    assert result.already_solved is False
    assert result.game.secret == "BCDE"

    # Guessing again after the win
    result = store.guess(game.game_id, "AAAA")
    assert result.already_solved is True
    assert result.game.guess_count == 3


def test_store_create_returns_game_even_if_discarded_right_away(scripted):
    store = SessionStore()
    game = store.create("ABCDEF", 4, scripted([0]))

    assert store.discard(game.game_id) is True
    # The snapshot from create stays usable
    assert game.pool == "ABCDEF"
    assert game.length == 4
    assert store.snapshot(game.game_id) is None


def test_store_unknown_game(scripted):
    store = SessionStore()
    assert store.get("missing") is None
    assert store.snapshot("missing") is None
    assert store.guess("missing", "ABCD") is None
    assert store.restart("missing") is None
    assert store.discard("missing") is False


def test_store_invalid_guess_propagates(scripted):
    store = SessionStore()
    game = store.create("ABCDEF", 4, scripted([0]))

    with pytest.raises(InvalidGuessLength):
        store.guess(game.game_id, "ABCDE")
    assert store.snapshot(game.game_id).guess_count == 0


def test_store_restart_and_discard(scripted):
    store = SessionStore()
    game_id = store.create("ABCDEF", 4, scripted([0])).game_id
    store.guess(game_id, "AAAA")

    game = store.restart(game_id)
    assert game.guess_count == 0
    assert game.history == ()
    assert game.secret == "AAAA"

    assert len(store) == 1
    assert store.discard(game_id) is True
    assert store.get(game_id) is None
    assert len(store) == 0


def test_store_snapshots_do_not_change_later(scripted):
    store = SessionStore()
    game_id = store.create("ABCDEF", 4, scripted([0])).game_id
    store.guess(game_id, "AAAA")

    before = store.snapshot(game_id)
    store.restart(game_id)

    assert before.guess_count == 1
    assert before.solved is True
    assert store.snapshot(game_id).guess_count == 0


def test_store_games_are_independent(scripted):
    store = SessionStore()
    first = store.create("ABCDEF", 4, scripted([0])).game_id
    second = store.create("ABCDEF", 4, scripted([5])).game_id

    assert first != second
    store.guess(first, "AAAA")
    assert store.snapshot(first).guess_count == 1
    assert store.snapshot(second).guess_count == 0
    assert store.snapshot(second).secret == "FFFF"


def test_store_serializes_concurrent_guesses(scripted):
    store = SessionStore()
    game_id = store.create("ABCDEF", 4, scripted([0])).game_id
    counts = []

    def worker():
        for _ in range(50):
            counts.append(store.guess(game_id, "ABCD").game.guess_count)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert store.snapshot(game_id).guess_count == 200
    # Each reply saw exactly the count right after its own guess
    assert sorted(counts) == list(range(1, 201))


def test_store_builds_secret_outside_the_lock(scripted):
    store = SessionStore()
    game_id = store.create("ABCDEF", 4, scripted([0])).game_id
    seen = []

    class CheckingSource:
        def randbelow(self, n):
            # Another thread can still use the store while a secret is drawn
            worker = threading.Thread(target=lambda: seen.append(store.guess(game_id, "AAAA")))
            worker.start()
            worker.join(timeout=2)
            seen.append(worker.is_alive())
            return 0

    store.create("ABCDEF", 1, CheckingSource())

    assert seen[-1] is False
    assert seen[0].game.guess_count == 1
