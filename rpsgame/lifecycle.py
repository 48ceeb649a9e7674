"""
Creation, joining and cancellation of games.

Each function validates the request against the registry, and then asks the registry
to perform the transition. Validation is complete before anything is written, so a
rejected request leaves the registry untouched.
"""

from .access import only_owner
from .commitment import COMMITMENT_LEN
from .errors import CannotCancelError, DepositMismatchError, InsufficientDepositError, InvalidGameIdError, SelfPlayError
from .game import Game, GameStatus
from .registry import GameRegistry
from .rules import Hand
from .utils import NO_WINNER, check_amount


def initialize(registry: GameRegistry, commitment: bytes, deposited_amount: int, caller: bytes) -> Game:
    only_owner(registry, caller)

    if len(commitment) != COMMITMENT_LEN:
        raise ValueError(f"The commitment must be {COMMITMENT_LEN} bytes long")

    if check_amount(deposited_amount) < registry.participation_fee:
        raise InsufficientDepositError()

    return registry.create(caller, commitment, deposited_amount)


def join(registry: GameRegistry, game_id: int, hand: Hand, deposited_amount: int, caller: bytes) -> Game:
    game = registry.get(game_id)
    if game is None or game.status != GameStatus.INITIALIZED:
        raise InvalidGameIdError()

    if caller == game.owner:
        raise SelfPlayError()

    if deposited_amount != game.stake:
        raise DepositMismatchError()

    registry.start(game, caller, Hand(hand))
    return game


def cancel(registry: GameRegistry, game_id: int, caller: bytes) -> Game:
    only_owner(registry, caller)

    game = registry.get(game_id)
    if game is None or game.status != GameStatus.INITIALIZED:
        raise CannotCancelError()

    registry.finalize(game, NO_WINNER, [(game.owner, game.stake)])
    return game
