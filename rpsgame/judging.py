"""
Judging of games in progress.

Either participant can ask for judgment, as long as they know the owner's secret;
this way the player can settle the game even if the owner would rather not reveal.

- judge: the hand is recovered from the commitment by trying all the possible hands;
- judge_with_hand: the caller states the owner's hand, which must open the commitment.

Once the owner's hand is known, the winner takes the whole pot (twice the stake);
on a tie, each participant gets back its own stake.
"""

import logging
from typing import List, Tuple

from .commitment import reveal_hand, verify_hand
from .errors import InvalidGameStatusError, InvalidJudgerError
from .game import Game, GameStatus
from .registry import GameRegistry
from .rules import Hand, Outcome, adjudicate
from .utils import NO_WINNER


logger = logging.getLogger(__name__)


def _get_judgeable(registry: GameRegistry, game_id: int, caller: bytes) -> Game:
    game = registry.get(game_id)
    if game is None or game.status != GameStatus.IN_PROGRESS:
        raise InvalidGameStatusError()

    if caller != game.owner and caller != game.player:
        raise InvalidJudgerError()

    return game


def settlement(game: Game, owner_hand: Hand) -> Tuple[bytes, List[Tuple[bytes, int]]]:
    """Returns the winner of an in-progress game, and the list of payouts."""
    assert game.player is not None and game.player_hand is not None

    outcome = adjudicate(owner_hand, game.player_hand)
    pot = 2 * game.stake

    if outcome == Outcome.OWNER_WINS:
        return game.owner, [(game.owner, pot)]
    elif outcome == Outcome.PLAYER_WINS:
        return game.player, [(game.player, pot)]
    else:
        return NO_WINNER, [(game.owner, game.stake), (game.player, game.stake)]


def _settle(registry: GameRegistry, game: Game, owner_hand: Hand) -> Game:
    winner, payouts = settlement(game, owner_hand)

    logger.debug("game %d: owner played %s, player played %s", game.id, owner_hand, game.player_hand)

    registry.finalize(game, winner, payouts, owner_hand=owner_hand)
    return game


def judge(registry: GameRegistry, game_id: int, secret: bytes, caller: bytes) -> Game:
    game = _get_judgeable(registry, game_id, caller)

    owner_hand = reveal_hand(game.owner_commitment, game.owner, secret)

    return _settle(registry, game, owner_hand)


def judge_with_hand(registry: GameRegistry, game_id: int, hand: Hand, secret: bytes, caller: bytes) -> Game:
    game = _get_judgeable(registry, game_id, caller)

    owner_hand = verify_hand(game.owner_commitment, game.owner, Hand(hand), secret)

    return _settle(registry, game, owner_hand)
