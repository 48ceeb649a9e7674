from typing import Dict, List

from rpsgame import GameContract, Hand, Ledger
from rpsgame.commitment import calculate_commitment
from rpsgame.utils import address_from_name, format_secret, parse_amount


owner = address_from_name("owner")
player = address_from_name("player")
other = address_from_name("other")

INITIAL_BALANCE = parse_amount("10")

SECRET = format_secret("random")


def make_commitment(hand: Hand, secret: bytes = SECRET, identity: bytes = owner) -> bytes:
    return calculate_commitment(identity, hand, secret)


def balances(ledger: Ledger, addresses: List[bytes]) -> Dict[bytes, int]:
    return {address: ledger.balance_of(address) for address in addresses}


def start_game(contract: GameContract, owner_hand: Hand, player_hand: Hand, stake: int, secret: bytes = SECRET) -> int:
    """Creates a game committed to `owner_hand`, and joins it with `player_hand`. Returns the game id."""
    game_id = contract.initialize_game(make_commitment(owner_hand, secret), sender=owner, value=stake)
    contract.join(game_id, player_hand, sender=player, value=stake)
    return game_id
