import pytest

from rpsgame import Ledger
from rpsgame.errors import InsufficientFundsError
from rpsgame.utils import address_from_name, format_amount, parse_amount

from test_utils import INITIAL_BALANCE, other, owner, player


def test_transfer(ledger: Ledger):
    ledger.transfer(owner, player, 5)

    assert ledger.balance_of(owner) == INITIAL_BALANCE - 5
    assert ledger.balance_of(player) == INITIAL_BALANCE + 5

    with pytest.raises(InsufficientFundsError):
        ledger.transfer(other, player, INITIAL_BALANCE + 1)

    with pytest.raises(ValueError):
        ledger.transfer(owner, player, -1)


def test_hooks(ledger: Ledger):
    received = []
    ledger.set_hook(player, lambda sender, amount: received.append((sender, amount)))

    ledger.transfer(owner, player, 7)
    ledger.transfer(player, owner, 3)

    assert received == [(owner, 7)]


def test_events_and_snapshots(ledger: Ledger):
    snapshot = ledger.snapshot()

    ledger.emit(owner, "Test", 1, 2)
    ledger.transfer(owner, player, 1)
    assert [ev.args for ev in ledger.get_events("Test")] == [(1, 2)]

    ledger.restore(snapshot)
    assert ledger.get_events() == []
    assert ledger.balance_of(owner) == INITIAL_BALANCE


def test_amounts():
    assert parse_amount("0.1") == 10**17
    assert parse_amount("1") == 10**18
    assert format_amount(parse_amount("0.15")) == "0.15"
    assert format_amount(parse_amount("10")) == "10"

    with pytest.raises(ValueError):
        parse_amount("abc")
    with pytest.raises(ValueError):
        parse_amount("-1")
    with pytest.raises(ValueError):
        parse_amount("0.0000000000000000001")

    # more significant digits than the default decimal context keeps
    assert parse_amount("12345678901.123456789012345678") == 12345678901123456789012345678
    assert format_amount(12345678901123456789012345678) == "12345678901.123456789012345678"
    with pytest.raises(ValueError):
        parse_amount("12345678901.1234567890123456789")
    with pytest.raises(ValueError):
        parse_amount("Infinity")


def test_nested_snapshots(ledger: Ledger):
    outer = ledger.snapshot()
    ledger.transfer(owner, player, 1)

    inner = ledger.snapshot()
    ledger.transfer(player, other, 2)
    ledger.mint(address_from_name("fresh"), 3)
    ledger.restore(inner)

    assert ledger.balance_of(player) == INITIAL_BALANCE + 1
    assert ledger.balance_of(other) == INITIAL_BALANCE
    assert address_from_name("fresh") not in ledger.balances

    inner = ledger.snapshot()
    ledger.transfer(player, other, 2)
    ledger.release(inner)

    ledger.restore(outer)
    assert ledger.balance_of(owner) == INITIAL_BALANCE
    assert ledger.balance_of(player) == INITIAL_BALANCE
    assert ledger.balance_of(other) == INITIAL_BALANCE


def test_snapshots_close_in_reverse_order(ledger: Ledger):
    outer = ledger.snapshot()
    inner = ledger.snapshot()

    with pytest.raises(ValueError):
        ledger.release(outer)

    ledger.release(inner)
    ledger.release(outer)
