import os
from typing import Dict, Optional

from dotenv import load_dotenv

from .contract import GameContract
from .ledger import Ledger
from .utils import NO_WINNER, address_from_name, parse_amount

DEFAULT_ACCOUNTS = ["owner", "player", "other"]


def load_settings() -> Dict[str, str]:
    """Reads the settings from the environment, after loading the .env file if present."""
    load_dotenv()

    return {
        "participation_fee": os.getenv("RPS_PARTICIPATION_FEE", "0.1"),
        "initial_balance": os.getenv("RPS_INITIAL_BALANCE", "10"),
        "interactive": os.getenv("RPS_INTERACTIVE", "1"),
    }


class Environment:
    def __init__(self, ledger: Ledger, contract: GameContract, accounts: Dict[str, bytes], interactive: bool):
        self.ledger = ledger
        self.contract = contract
        self.accounts = accounts
        self.interactive = interactive

    @classmethod
    def from_settings(cls, settings: Dict[str, str], *, participation_fee: Optional[str] = None,
                      interactive: Optional[bool] = None) -> 'Environment':
        """
        Creates a ledger with the demo accounts, each funded with the initial balance, and deploys
        a GameContract owned by the "owner" account.
        """

        fee = parse_amount(participation_fee if participation_fee is not None else settings["participation_fee"])
        initial_balance = parse_amount(settings["initial_balance"])
        if interactive is None:
            interactive = settings["interactive"].lower() not in ["0", "false", "no"]

        ledger = Ledger()
        accounts = {name: address_from_name(name) for name in DEFAULT_ACCOUNTS}
        for address in accounts.values():
            ledger.mint(address, initial_balance)

        contract = GameContract(ledger, accounts["owner"], fee)
        return cls(ledger, contract, accounts, interactive)

    def account(self, name: str) -> bytes:
        if name not in self.accounts:
            raise ValueError(f"Unknown account: {name}")
        return self.accounts[name]

    def account_name(self, address: Optional[bytes]) -> str:
        if address is None:
            return "-"
        if address == NO_WINNER:
            return "no winner"
        for name, addr in self.accounts.items():
            if addr == address:
                return name
        return address.hex()

    def prompt(self, message: Optional[str] = None):
        if message is not None:
            print(message)
        if self.interactive:
            print("Press Enter to continue...")
            input()
