from .commitment import calculate_commitment, reveal_hand, verify_hand
from .contract import RECEIVE_TAG, GameContract
from .errors import (
    AuthorizationError,
    CannotCancelError,
    CommitmentError,
    DepositError,
    DepositMismatchError,
    GameError,
    GameStateError,
    HandMismatchError,
    InsufficientDepositError,
    InsufficientFundsError,
    InvalidGameIdError,
    InvalidGameStatusError,
    InvalidJudgerError,
    OwnershipError,
    SelfPlayError,
    WrongCommitmentError,
)
from .game import Game, GameStatus
from .ledger import Event, Ledger
from .registry import GameRegistry
from .rules import Hand, Outcome, adjudicate
from .utils import NO_WINNER, UNIT, address_from_name, format_amount, format_secret, parse_amount
