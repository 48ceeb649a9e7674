"""
This module provides the public interface of the Rock-Paper-Scissors game.

A GameContract binds a GameRegistry to the Ledger that holds its funds, and exposes one method
per operation. Each method receives the identity of the caller (`sender`) and, for the operations
that take a deposit, the amount attached to the call (`value`).

Every call is executed atomically and in total order with respect to all the other calls:
- calls are serialized by a re-entrant lock, so a receive hook triggered by a payout can call
  back into the contract, and it will observe the state already updated by the outer call;
- if any exception is raised, both the registry and the ledger are restored to the state they
  had before the call, so a rejected call neither changes any game nor takes any funds.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional

from . import access, judging, lifecycle
from .game import Game, GameStatus
from .ledger import Ledger
from .registry import GameRegistry
from .rules import Hand
from .utils import address_from_name, check_address, check_amount


logger = logging.getLogger(__name__)

# tag carried by the event emitted for unsolicited transfers
RECEIVE_TAG: str = "receive"


class GameContract:
    """
    The escrowing commit-reveal Rock-Paper-Scissors game.

    The owner creates games by committing to a hand and depositing a stake; any other account can
    join a game by playing a hand in the clear and depositing the same stake; the owner (or the
    player, if they know the owner's secret) then reveals the owner's hand, and the pot is paid out.
    """

    def __init__(self, ledger: Ledger, owner: bytes, participation_fee: int, *, address: Optional[bytes] = None):
        """
        Deploys a new game contract.

        Parameters:
            ledger (Ledger): The ledger that holds the funds of all the accounts.
            owner (bytes): The owner's identity.
            participation_fee (int): The initial minimum stake, in base units.
            address (Optional[bytes]): The contract's account in the ledger. Defaults to an address derived
                from the owner's.
        """

        if address is None:
            address = address_from_name("rps-game:" + check_address(owner).hex())

        self.ledger = ledger
        self.registry = GameRegistry(ledger, address, owner, participation_fee)

        self._lock = threading.RLock()

    @property
    def address(self) -> bytes:
        return self.registry.address

    @property
    def owner(self) -> bytes:
        return self.registry.owner

    @property
    def participation_fee(self) -> int:
        return self.registry.participation_fee

    @property
    def current_game_id(self) -> int:
        """The id that will be assigned to the next game."""
        return self.registry.next_game_id

    @property
    def balance(self) -> int:
        return self.ledger.balance_of(self.address)

    def game(self, game_id: int) -> Optional[Game]:
        """Returns a copy of the game record, or None if the game does not exist."""
        with self._lock:
            game = self.registry.get(game_id)
            return None if game is None else game.copy()

    def game_status(self, game_id: int) -> GameStatus:
        with self._lock:
            return self.registry.status_of(game_id)

    def games(self) -> List[Game]:
        with self._lock:
            return [game.copy() for game in self.registry]

    @contextmanager
    def _transaction(self, name: str) -> Iterator[None]:
        with self._lock:
            registry_snapshot = self.registry.snapshot()
            ledger_snapshot = self.ledger.snapshot()
            try:
                yield
            except Exception as err:
                self.ledger.restore(ledger_snapshot)
                self.registry.restore(registry_snapshot)
                logger.info("%s rejected: %s", name, err)
                raise
            else:
                self.ledger.release(ledger_snapshot)
                self.registry.release(registry_snapshot)

    def initialize_game(self, commitment: bytes, *, sender: bytes, value: int) -> int:
        """
        Creates a new game. Owner only.

        Parameters:
            commitment (bytes): The commitment to the owner's hand (see `calculate_commitment`).
            sender (bytes): The caller.
            value (int): The stake; it must be at least the current participation fee.

        Returns:
            int: The id of the new game.

        Raises:
            OwnershipError: If the caller is not the owner.
            InsufficientDepositError: If the value is lower than the participation fee.
        """
        with self._transaction("initialize_game"):
            return lifecycle.initialize(self.registry, commitment, check_amount(value), sender).id

    def join(self, game_id: int, hand: Hand, *, sender: bytes, value: int):
        """
        Joins an initialized game, playing `hand`. The value must be exactly the game's stake.

        Raises:
            InvalidGameIdError: If the game does not exist, or it is not waiting for a player.
            SelfPlayError: If the caller is the owner of the game.
            DepositMismatchError: If the value differs from the game's stake.
        """
        with self._transaction("join"):
            lifecycle.join(self.registry, game_id, hand, check_amount(value), sender)

    def cancel(self, game_id: int, *, sender: bytes):
        """
        Withdraws a game that nobody joined yet, refunding the stake. Owner only.

        Raises:
            OwnershipError: If the caller is not the owner.
            CannotCancelError: If the game is not waiting for a player.
        """
        with self._transaction("cancel"):
            lifecycle.cancel(self.registry, game_id, sender)

    def judge(self, game_id: int, secret: bytes, *, sender: bytes) -> Optional[bytes]:
        """
        Reveals the owner's hand from the secret alone, and settles the game.

        Returns:
            bytes: The winner, or NO_WINNER on a tie.

        Raises:
            InvalidGameStatusError: If the game is not in progress.
            InvalidJudgerError: If the caller is neither the owner nor the player of the game.
            WrongCommitmentError: If the secret does not open the commitment for any hand.
        """
        with self._transaction("judge"):
            return judging.judge(self.registry, game_id, secret, sender).winner

    def judge_with_hand(self, game_id: int, hand: Hand, secret: bytes, *, sender: bytes) -> Optional[bytes]:
        """
        Like `judge`, but the caller states the owner's hand.

        Raises:
            HandMismatchError: If the commitment does not open to `hand` with the given secret.
        """
        with self._transaction("judge_with_hand"):
            return judging.judge_with_hand(self.registry, game_id, hand, secret, sender).winner

    def configure_fee(self, new_fee: int, *, sender: bytes):
        with self._transaction("configure_fee"):
            access.configure_fee(self.registry, new_fee, sender)

    def transfer_ownership(self, new_owner: bytes, *, sender: bytes):
        with self._transaction("transfer_ownership"):
            access.transfer_ownership(self.registry, new_owner, sender)

    def receive(self, *, sender: bytes, value: int):
        """Accepts a plain transfer, unrelated to any game."""
        with self._transaction("receive"):
            self.ledger.transfer(sender, self.address, check_amount(value))
            self.ledger.emit(self.address, "Receive", RECEIVE_TAG)
