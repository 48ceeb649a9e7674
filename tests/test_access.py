import pytest

from rpsgame import RECEIVE_TAG, GameContract, Hand, Ledger, NO_WINNER
from rpsgame.errors import InsufficientDepositError, InsufficientFundsError, OwnershipError
from rpsgame.utils import address_from_name, parse_amount

from test_utils import INITIAL_BALANCE, make_commitment, other, owner, player


def test_configure_fee(contract: GameContract):
    new_fee = parse_amount("0.2")

    contract.configure_fee(new_fee, sender=owner)

    with pytest.raises(OwnershipError, match="caller is not the owner"):
        contract.configure_fee(parse_amount("0.01"), sender=player)

    assert contract.participation_fee == new_fee


def test_configure_fee_applies_to_new_games(contract: GameContract, fee: int):
    contract.initialize_game(make_commitment(Hand.ROCK), sender=owner, value=fee)

    contract.configure_fee(2 * fee, sender=owner)

    with pytest.raises(InsufficientDepositError):
        contract.initialize_game(make_commitment(Hand.ROCK), sender=owner, value=fee)

    contract.initialize_game(make_commitment(Hand.ROCK), sender=owner, value=2 * fee)

    assert contract.game(0).stake == fee
    assert contract.game(1).stake == 2 * fee


def test_zero_fee(contract: GameContract):
    contract.configure_fee(0, sender=owner)

    game_id = contract.initialize_game(make_commitment(Hand.ROCK), sender=owner, value=0)
    contract.join(game_id, Hand.SCISSORS, sender=player, value=0)

    assert contract.judge(game_id, b"random" + bytes(26), sender=player) == owner


def test_zero_value_calls_from_unfunded_account(contract: GameContract, ledger: Ledger):
    # an account that never received anything has no ledger entry
    fresh = address_from_name("fresh")
    contract.configure_fee(0, sender=owner)

    game_id = contract.initialize_game(make_commitment(Hand.ROCK), sender=owner, value=0)
    contract.join(game_id, Hand.SCISSORS, sender=fresh, value=0)
    contract.receive(sender=fresh, value=0)

    assert contract.game(game_id).player == fresh
    assert ledger.balance_of(fresh) == 0
    assert len(ledger.get_events("Receive")) == 1


def test_negative_fee_rejected(contract: GameContract, fee: int):
    with pytest.raises(ValueError):
        contract.configure_fee(-1, sender=owner)

    assert contract.participation_fee == fee


def test_transfer_ownership(contract: GameContract, fee: int):
    with pytest.raises(OwnershipError):
        contract.transfer_ownership(player, sender=player)

    with pytest.raises(ValueError):
        contract.transfer_ownership(NO_WINNER, sender=owner)

    contract.transfer_ownership(other, sender=owner)
    assert contract.owner == other

    with pytest.raises(OwnershipError):
        contract.configure_fee(fee, sender=owner)

    game_id = contract.initialize_game(make_commitment(Hand.ROCK, identity=other), sender=other, value=fee)

    # the previous owner can now join
    contract.join(game_id, Hand.PAPER, sender=owner, value=fee)


def test_receive(contract: GameContract, ledger: Ledger, fee: int):
    contract.initialize_game(make_commitment(Hand.ROCK), sender=owner, value=fee)

    contract.receive(sender=owner, value=parse_amount("1.0"))

    events = ledger.get_events("Receive")
    assert len(events) == 1
    assert events[0].emitter == contract.address
    assert events[0].args == (RECEIVE_TAG,)
    assert RECEIVE_TAG == "receive"

    assert contract.balance == fee + parse_amount("1.0")
    assert contract.registry.escrowed_total() == fee
    assert contract.current_game_id == 1


def test_receive_without_funds(contract: GameContract, ledger: Ledger):
    with pytest.raises(InsufficientFundsError):
        contract.receive(sender=other, value=INITIAL_BALANCE + 1)

    # no event is left behind by a rejected call
    assert ledger.get_events() == []
    assert ledger.balance_of(other) == INITIAL_BALANCE
