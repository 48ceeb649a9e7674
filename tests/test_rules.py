import pytest

from rpsgame.rules import Hand, Outcome, adjudicate


R, S, P = Hand.ROCK, Hand.SCISSORS, Hand.PAPER


@pytest.mark.parametrize("owner_hand, player_hand, outcome", [
    (R, S, Outcome.OWNER_WINS),
    (S, P, Outcome.OWNER_WINS),
    (P, R, Outcome.OWNER_WINS),
    (S, R, Outcome.PLAYER_WINS),
    (P, S, Outcome.PLAYER_WINS),
    (R, P, Outcome.PLAYER_WINS),
    (R, R, Outcome.TIE),
    (S, S, Outcome.TIE),
    (P, P, Outcome.TIE),
])
def test_adjudicate(owner_hand: Hand, player_hand: Hand, outcome: Outcome):
    assert adjudicate(owner_hand, player_hand) == outcome


def test_adjudicate_is_antisymmetric():
    for a in Hand:
        for b in Hand:
            if a == b:
                continue
            assert {adjudicate(a, b), adjudicate(b, a)} == {Outcome.OWNER_WINS, Outcome.PLAYER_WINS}


def test_hand_values():
    # the values are part of the commitment encoding
    assert [int(h) for h in (R, S, P)] == [0, 1, 2]


def test_hand_parse():
    assert Hand.parse("rock") == R
    assert Hand.parse(" Paper ") == P
    assert Hand.parse("1") == S
    assert Hand.parse(2) == P
    assert Hand.parse(S) is S
    assert f"{R}" == "rock"

    with pytest.raises(ValueError):
        Hand.parse("lizard")
    with pytest.raises(ValueError):
        Hand.parse(3)
