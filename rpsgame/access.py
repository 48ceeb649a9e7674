import logging

from .errors import OwnershipError
from .registry import GameRegistry
from .utils import NO_WINNER, check_address, check_amount


logger = logging.getLogger(__name__)


def only_owner(registry: GameRegistry, caller: bytes):
    if caller != registry.owner:
        logger.debug("rejected call from non-owner %s", caller.hex())
        raise OwnershipError()


def configure_fee(registry: GameRegistry, new_fee: int, caller: bytes):
    """Sets the minimum stake of the games created from now on. Existing games keep their stake."""
    only_owner(registry, caller)
    registry.set_fee(check_amount(new_fee))


def transfer_ownership(registry: GameRegistry, new_owner: bytes, caller: bytes):
    only_owner(registry, caller)
    if check_address(new_owner) == NO_WINNER:
        raise ValueError("The new owner cannot be the zero address")
    registry.set_owner(new_owner)
