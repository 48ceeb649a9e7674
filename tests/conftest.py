import pytest

import sys
import os

root_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), '../')
sys.path.append(root_path)

from rpsgame import GameContract, Ledger  # noqa: E402
from rpsgame.utils import parse_amount  # noqa: E402

from test_utils import INITIAL_BALANCE, other, owner, player  # noqa: E402


FEE = parse_amount("0.1")


@pytest.fixture
def ledger() -> Ledger:
    ledger = Ledger()
    for address in [owner, player, other]:
        ledger.mint(address, INITIAL_BALANCE)
    return ledger


@pytest.fixture
def contract(ledger: Ledger) -> GameContract:
    return GameContract(ledger, owner, FEE)


@pytest.fixture
def fee() -> int:
    return FEE
