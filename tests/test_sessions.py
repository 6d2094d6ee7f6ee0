from __future__ import annotations

import threading

from engine import AIPlayer, Game, SessionStore


class FirstEmptyAI:
    def best_move(self, board, side=None):
        return board.index("")


def test_sessions_are_created_on_first_access():
    store = SessionStore()
    assert len(store) == 0
    with store.session("a") as game:
        assert isinstance(game, Game)
        assert game.move_count == 0
    assert len(store) == 1


def test_sessions_are_independent():
    store = SessionStore()
    with store.session("a") as game:
        game.accept_move(0)
    with store.session("b") as game:
        assert game.move_count == 0
        game.accept_move(4)
    with store.session("a") as game:
        assert game.snapshot()["board"][0] == "X"
        assert game.snapshot()["board"][4] == "O"


def test_reset_replaces_only_named_session():
    store = SessionStore()
    with store.session("a") as game:
        game.accept_move(0)
        old = game
    with store.session("b") as game:
        game.accept_move(0)

    snap = store.reset("a")
    assert snap["move_count"] == 0
    assert snap["board"] == [""] * 9
    with store.session("a") as game:
        assert game is not old
        assert game.move_count == 0
    with store.session("b") as game:
        assert game.move_count == 2


def test_games_share_the_store_engine():
    ai = AIPlayer()
    store = SessionStore(ai=ai)
    with store.session("a") as game:
        assert game.ai is ai
    store.reset("a")
    with store.session("a") as game:
        assert game.ai is ai


def test_concurrent_moves_on_one_session_are_serialized():
    store = SessionStore()
    results = []

    def play():
        with store.session("shared") as game:
            snap = game.snapshot()
            if not snap["game_over"]:
                results.append(game.accept_move(snap["board"].index("")))

    threads = [threading.Thread(target=play) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    with store.session("shared") as game:
        snap = game.snapshot()
    assert snap["move_count"] == sum(1 for cell in snap["board"] if cell)
    assert snap["game_over"] is True
    assert len(results) <= 5


def test_read_only_access_does_not_store_sessions():
    store = SessionStore()
    for i in range(50):
        with store.session(f"s{i}", create=False) as game:
            assert game.snapshot()["move_count"] == 0
    assert len(store) == 0

    with store.session("kept") as game:
        game.accept_move(0)
    with store.session("kept", create=False) as game:
        assert game.move_count == 2
    assert len(store) == 1


def test_least_recently_used_session_is_dropped_past_cap():
    store = SessionStore(max_sessions=2)
    with store.session("a") as game:
        game.accept_move(0)
    with store.session("b"):
        pass
    with store.session("a"):
        pass
    with store.session("c"):
        pass
    assert len(store) == 2
    with store.session("a", create=False) as game:
        assert game.move_count == 2
    assert "b" not in store
    assert "a" in store and "c" in store


def test_tally_survives_reset():
    store = SessionStore(factory=lambda: Game(ai=FirstEmptyAI()))
    # X at 3, 4, 5 against O at 0, 1 wins the middle row
    for _ in range(2):
        with store.session("a") as game:
            for position in (3, 4, 5):
                game.accept_move(position)
        snap = store.reset("a")
        assert snap["move_count"] == 0
    assert snap["scores"] == {"player": 2, "ai": 0, "draw": 0}
    with store.session("b") as game:
        assert game.snapshot()["scores"] == {"player": 0, "ai": 0, "draw": 0}
