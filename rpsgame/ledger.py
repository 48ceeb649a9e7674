"""
An in-process ledger: account balances, transfers and an event log.

The Ledger plays the role of the host chain for the game contract. It keeps the
balance of every account in base units, and appends an Event to its log whenever
a contract emits one.

Accounts may register a receive hook, which is called after the account is credited
(for example, to simulate a contract that reacts to incoming payments). Hooks run
synchronously, on the thread that made the transfer.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .errors import InsufficientFundsError
from .utils import check_address, check_amount, format_amount


logger = logging.getLogger(__name__)


ReceiveHook = Callable[[bytes, int], None]

# account => balance before the snapshot (None if the account had no entry)
Journal = Dict[bytes, Optional[int]]


@dataclass
class Event:
    name: str
    emitter: bytes
    args: Tuple = field(default_factory=tuple)

    def __repr__(self):
        return f"Event(name={self.name}, emitter={self.emitter.hex()}, args={self.args})"


class Ledger:
    def __init__(self):
        self.balances: Dict[bytes, int] = {}
        self.events: List[Event] = []
        self.hooks: Dict[bytes, ReceiveHook] = {}

        self._journals: List[Journal] = []

    def balance_of(self, address: bytes) -> int:
        return self.balances.get(check_address(address), 0)

    def _set_balance(self, address: bytes, value: int):
        # remember the previous balance in every open snapshot that has not seen this account yet
        for journal in self._journals:
            if address not in journal:
                journal[address] = self.balances.get(address)
        self.balances[address] = value

    def mint(self, address: bytes, amount: int):
        """Credits new funds to an account (demos and tests only)."""
        check_address(address)
        self._set_balance(address, self.balances.get(address, 0) + check_amount(amount))

    def set_hook(self, address: bytes, hook: Optional[ReceiveHook]):
        if hook is None:
            self.hooks.pop(check_address(address), None)
        else:
            self.hooks[check_address(address)] = hook

    def transfer(self, sender: bytes, recipient: bytes, amount: int):
        """
        Moves `amount` base units from `sender` to `recipient`, then calls the recipient's hook, if any.
        Accounts that never received anything have a zero balance.

        Raises:
            InsufficientFundsError: if the sender's balance is lower than amount.
        """
        check_address(sender)
        check_address(recipient)
        check_amount(amount)

        sender_balance = self.balances.get(sender, 0)
        if sender_balance < amount:
            raise InsufficientFundsError()

        self._set_balance(sender, sender_balance - amount)
        self._set_balance(recipient, self.balances.get(recipient, 0) + amount)

        logger.debug("transfer %s -> %s: %s", sender.hex(), recipient.hex(), format_amount(amount))

        hook = self.hooks.get(recipient)
        if hook is not None:
            hook(sender, amount)

    def emit(self, emitter: bytes, name: str, *args):
        event = Event(name, emitter, tuple(args))
        self.events.append(event)
        logger.info("event %s", event)

    def get_events(self, name: Optional[str] = None) -> List[Event]:
        if name is None:
            return list(self.events)
        return [ev for ev in self.events if ev.name == name]

    def snapshot(self) -> Tuple[Journal, int]:
        """
        Opens a snapshot. Only the balances changed after this call are recorded, so the cost
        does not depend on the number of accounts. Snapshots must be closed in reverse order,
        with either restore or release.
        """
        journal: Journal = {}
        self._journals.append(journal)
        return journal, len(self.events)

    def _close(self, journal: Journal):
        if not self._journals or self._journals[-1] is not journal:
            raise ValueError("Snapshots must be closed in reverse order")
        self._journals.pop()

    def release(self, snapshot: Tuple[Journal, int]):
        """Closes a snapshot, keeping all the changes made since."""
        self._close(snapshot[0])

    def restore(self, snapshot: Tuple[Journal, int]):
        """Closes a snapshot, undoing all the changes made since."""
        journal, n_events = snapshot
        self._close(journal)

        for address, old_balance in journal.items():
            if old_balance is None:
                self.balances.pop(address, None)
            else:
                self.balances[address] = old_balance
        del self.events[n_events:]
