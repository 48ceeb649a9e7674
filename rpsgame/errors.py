"""
Exceptions raised by the game contract.

Every failure is a synchronous rejection of the whole operation: when one of these
exceptions escapes a GameContract method, neither the registry nor the ledger has changed.
The string of each exception is the failure code reported to the caller.
"""


class GameError(ValueError):
    """Base class for all the rejections of a game operation."""

    message: str = "game error"

    def __init__(self, message: str | None = None):
        super().__init__(message if message is not None else self.message)


class AuthorizationError(GameError):
    message = "unauthorized"


class OwnershipError(AuthorizationError):
    message = "caller is not the owner"


class InvalidJudgerError(AuthorizationError):
    message = "invalid judger"


class GameStateError(GameError):
    message = "invalid state"


class InvalidGameIdError(GameStateError):
    # both "no such game" and "game not joinable"
    message = "invalid game ID"


class InvalidGameStatusError(GameStateError):
    message = "invalid game status"


class CannotCancelError(GameStateError):
    message = "cannot cancel"


class DepositError(GameError):
    message = "invalid deposit"


class InsufficientDepositError(DepositError):
    message = "deposit amount error"


class DepositMismatchError(DepositError):
    message = "deposit amount mismatch"


class CommitmentError(GameError):
    message = "invalid commitment"


class WrongCommitmentError(CommitmentError):
    message = "wrong commitment"


class HandMismatchError(CommitmentError):
    message = "owner hand is not same with saved one"


class SelfPlayError(GameError):
    message = "cannot play alone"


class InsufficientFundsError(GameError):
    message = "insufficient funds"
