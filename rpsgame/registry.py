"""
The GameRegistry keeps the list of all the Game records, together with the global
configuration (the participation fee and the next game id), and the funds held in
escrow on behalf of the games.

It is the only object that writes to a Game record: the lifecycle and judging
functions validate the request, and then ask the registry to perform the transition.
Funds are always released after the corresponding state transition is recorded.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .game import Game, GameStatus
from .ledger import Ledger
from .rules import Hand
from .utils import check_address, check_amount, format_amount


logger = logging.getLogger(__name__)


class GameRegistry:
    def __init__(self, ledger: Ledger, address: bytes, owner: bytes, participation_fee: int):
        """
        Initializes an empty registry.

        Parameters:
            ledger (Ledger): The ledger where the escrowed funds are held.
            address (bytes): The account of the registry in the ledger; it holds the escrowed funds.
            owner (bytes): The identity allowed to create and cancel games, and to configure the fee.
            participation_fee (int): The minimum stake for new games, in base units.
        """

        self.ledger = ledger
        self.address = check_address(address)
        self.owner = check_address(owner)
        self.participation_fee = check_amount(participation_fee)
        self.next_game_id = 0

        self.games: List[Game] = []

        self._journals: List[Dict[int, Game]] = []

    def __len__(self) -> int:
        return len(self.games)

    def __iter__(self) -> Iterator[Game]:
        return iter(self.games)

    def get(self, game_id: int) -> Optional[Game]:
        """Returns the game with the given id, or None if no such game was ever created."""
        if not isinstance(game_id, int) or not (0 <= game_id < len(self.games)):
            return None
        return self.games[game_id]

    def status_of(self, game_id: int) -> GameStatus:
        game = self.get(game_id)
        return GameStatus.NOT_INITIALIZED if game is None else game.status

    def escrowed_total(self) -> int:
        return sum(game.escrowed_amount() for game in self.games)

    def _check_game(self, game: Game, exp_status: GameStatus):
        if self.get(game.id) is not game:
            raise ValueError("Game not in this registry")
        if game.status != exp_status:
            raise ValueError(f"Game {game.id} in status {game.status.name}, but expected {exp_status.name}")

    def _deposit(self, sender: bytes, amount: int):
        self.ledger.transfer(sender, self.address, amount)

    def _pay(self, payouts: Sequence[Tuple[bytes, int]]):
        for recipient, amount in payouts:
            if amount > 0:
                self.ledger.transfer(self.address, recipient, amount)

    def set_fee(self, new_fee: int):
        old_fee, self.participation_fee = self.participation_fee, check_amount(new_fee)
        logger.info("participation fee changed: %s -> %s", format_amount(old_fee), format_amount(new_fee))

    def set_owner(self, new_owner: bytes):
        self.owner = check_address(new_owner)
        logger.info("ownership transferred to %s", new_owner.hex())

    def create(self, owner: bytes, commitment: bytes, stake: int) -> Game:
        """
        Appends a new INITIALIZED game, and takes the owner's stake in escrow.
        """

        game = Game(
            id=self.next_game_id,
            owner=owner,
            owner_commitment=commitment,
            stake=stake,
        )

        self._deposit(owner, stake)

        self.games.append(game)
        self.next_game_id += 1

        logger.info("game %d initialized, stake %s", game.id, format_amount(stake))
        return game

    def start(self, game: Game, player: bytes, hand: Hand):
        """
        Records the player's move, takes the player's stake in escrow, and moves the game to IN_PROGRESS.
        """

        self._check_game(game, GameStatus.INITIALIZED)

        self._deposit(player, game.stake)

        self._save(game)
        game.player = player
        game.player_hand = hand
        game.status = GameStatus.IN_PROGRESS

        logger.info("game %d joined by %s with %s", game.id, player.hex(), hand)

    def finalize(self, game: Game, winner: bytes, payouts: Sequence[Tuple[bytes, int]], owner_hand: Optional[Hand] = None):
        """
        Moves an INITIALIZED or IN_PROGRESS game to COMPLETED, and releases all its escrowed funds.

        The payouts must add up exactly to the amount escrowed for the game. The new status is recorded
        before any transfer is made, so that a reentrant call observes the game as COMPLETED.
        """

        if game.status not in [GameStatus.INITIALIZED, GameStatus.IN_PROGRESS]:
            raise ValueError(f"Cannot finalize game {game.id} in status {game.status.name}")
        self._check_game(game, game.status)

        escrowed = game.escrowed_amount()
        if sum(amount for _, amount in payouts) != escrowed:
            raise ValueError(f"Payouts for game {game.id} do not match the escrowed amount {escrowed}")

        self._save(game)
        game.status = GameStatus.COMPLETED
        game.winner = winner
        game.owner_hand = owner_hand

        logger.info("game %d completed, winner %s", game.id, winner.hex())

        self._pay(payouts)

    def _save(self, game: Game):
        # remember the record as it was before the first change in every open snapshot
        for journal in self._journals:
            if game.id not in journal:
                journal[game.id] = game.copy()

    def snapshot(self):
        """
        Opens a snapshot. Only the records changed after this call are copied, so the cost
        does not depend on the number of games. Snapshots must be closed in reverse order,
        with either restore or release.
        """
        journal: Dict[int, Game] = {}
        self._journals.append(journal)
        return journal, len(self.games), self.next_game_id, self.participation_fee, self.owner

    def _close(self, journal: Dict[int, Game]):
        if not self._journals or self._journals[-1] is not journal:
            raise ValueError("Snapshots must be closed in reverse order")
        self._journals.pop()

    def release(self, snapshot):
        """Closes a snapshot, keeping all the changes made since."""
        self._close(snapshot[0])

    def restore(self, snapshot):
        """Closes a snapshot, undoing all the changes made since."""
        journal, n_games, next_game_id, participation_fee, owner = snapshot
        self._close(journal)
        self.next_game_id, self.participation_fee, self.owner = next_game_id, participation_fee, owner

        # restore in place, so that Game objects handed out before the snapshot stay valid
        for game_id, saved in journal.items():
            if game_id < n_games:
                self.games[game_id].__dict__.update(saved.__dict__)
        del self.games[n_games:]
