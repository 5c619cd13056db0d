"""
Tests for GameSession serialising concurrent submissions.
"""

import threading

import pytest

from language_monopoly import GameSession
from language_monopoly.exceptions import InvariantViolation
from language_monopoly.game import ActionType
from language_monopoly.rules import Action


@pytest.fixture
def session(basic_game):
    return GameSession(basic_game)


def test_submit_applies_action(session):
    result = session.submit(Action(ActionType.ROLL_DICE, 0, dice=(1, 1)))

    assert result.ok
    assert session.version == 1
    assert session.offers(0).can_purchase


def test_stale_version_rejected(session):
    offer = session.offers(0)
    session.submit(Action(ActionType.ROLL_DICE, 0, dice=(1, 1)))

    result = session.submit(Action(ActionType.SKIP_PURCHASE, 0, space_id=2), expected_version=offer.version)

    assert not result.ok
    assert result.error == "StaleActionError"
    assert result.reason == "stale_action"
    assert session.game.pending_purchase is not None
    assert session.version == 1


def test_current_version_accepted(session):
    session.submit(Action(ActionType.ROLL_DICE, 0, dice=(1, 1)))
    offer = session.offers(0)

    result = session.submit(Action(ActionType.BUY_PROPERTY, 0, space_id=2), expected_version=offer.version)

    assert result.ok


def test_concurrent_purchases_apply_once(session):
    """Several threads race to buy the same pending space; exactly one wins."""
    session.submit(Action(ActionType.ROLL_DICE, 0, dice=(1, 1)))
    start = threading.Barrier(8)
    results = []
    results_lock = threading.Lock()

    def buy():
        start.wait()
        result = session.submit(Action(ActionType.BUY_PROPERTY, 0, space_id=2))
        with results_lock:
            results.append(result)

    threads = [threading.Thread(target=buy) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(r.ok for r in results) == 1
    assert all(r.error == "NoPendingEvent" for r in results if not r.ok)
    assert session.game.players[0].resources == 1440
    assert session.version == 2


def test_snapshot(session):
    session.submit(Action(ActionType.ROLL_DICE, 0, dice=(1, 2)))

    snap = session.snapshot()

    assert snap["version"] == 1
    assert snap["pending_special"] == {"kind": "library", "player_id": 0}


def test_invariant_violation_reraised(session):
    session.game.players[1].properties.add(4)

    with pytest.raises(InvariantViolation):
        session.submit(Action(ActionType.ROLL_DICE, 0, dice=(5, 6)))
