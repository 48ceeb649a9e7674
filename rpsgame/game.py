from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .rules import Hand


class GameStatus(Enum):
    """The lifetime of a game record. A game only moves forward along this list."""
    NOT_INITIALIZED = 0  # never created
    INITIALIZED = 1      # committed by the owner, waiting for a player
    IN_PROGRESS = 2      # joined by the player, waiting to be judged
    COMPLETED = 3        # judged or cancelled; funds fully disbursed


@dataclass
class Game:
    """
    A single game record.

    Attributes:
        id (int): The sequential identifier of the game.
        owner (bytes): The identity that created the game.
        owner_commitment (bytes): The digest binding the owner's identity, hand and secret.
        stake (int): The amount deposited by the owner, and required from the player.
        status (GameStatus): The current status.
        player (Optional[bytes]): The identity that joined the game, if any.
        player_hand (Optional[Hand]): The hand played by the player, if any.
        owner_hand (Optional[Hand]): The owner's hand, once revealed by judging.
        winner (Optional[bytes]): The recipient of the pot; NO_WINNER on ties and
            cancellations; None until the game is completed.
    """

    id: int
    owner: bytes
    owner_commitment: bytes
    stake: int
    status: GameStatus = GameStatus.INITIALIZED
    player: Optional[bytes] = None
    player_hand: Optional[Hand] = None
    owner_hand: Optional[Hand] = None
    winner: Optional[bytes] = None

    def copy(self) -> 'Game':
        return replace(self)

    def escrowed_amount(self) -> int:
        """The amount the registry holds on behalf of this game."""
        if self.status == GameStatus.INITIALIZED:
            return self.stake
        elif self.status == GameStatus.IN_PROGRESS:
            return 2 * self.stake
        else:
            return 0

    def __repr__(self):
        def fmt(x: Optional[bytes]) -> Optional[str]:
            return None if x is None else x.hex()

        return (f"{self.__class__.__name__}(id={self.id}, owner={fmt(self.owner)}, "
                f"owner_commitment={self.owner_commitment.hex()}, stake={self.stake}, status={self.status.name}, "
                f"player={fmt(self.player)}, player_hand={self.player_hand}, owner_hand={self.owner_hand}, "
                f"winner={fmt(self.winner)})")
