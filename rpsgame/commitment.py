"""
Commitment to the owner's hand.

The owner publishes

    c = SHA256(identity || hand || secret)

where identity is the 20-byte address of the committer, hand is encoded as a 32-byte
big-endian unsigned integer, and secret is a 32-byte value chosen by the owner.
Binding the identity prevents anyone else from replaying the commitment as their own.

The hand is revealed either explicitly (verify_hand), or by trying all the three
possible hands with the given secret (reveal_hand).
"""

import hashlib

from .errors import HandMismatchError, WrongCommitmentError
from .rules import Hand
from .utils import SECRET_LEN, check_address

COMMITMENT_LEN: int = 32


def encode_preimage(identity: bytes, hand: Hand, secret: bytes) -> bytes:
    check_address(identity)
    if len(secret) != SECRET_LEN:
        raise ValueError(f"The secret must be {SECRET_LEN} bytes long")

    return identity + int(Hand(hand)).to_bytes(32, byteorder='big') + secret


def calculate_commitment(identity: bytes, hand: Hand, secret: bytes) -> bytes:
    return hashlib.sha256(encode_preimage(identity, hand, secret)).digest()


def verify_hand(commitment: bytes, identity: bytes, hand: Hand, secret: bytes) -> Hand:
    """
    Checks that the commitment opens to the given hand.

    Raises:
        HandMismatchError: if the digest does not match.
    """
    if calculate_commitment(identity, hand, secret) != commitment:
        raise HandMismatchError()
    return Hand(hand)


def reveal_hand(commitment: bytes, identity: bytes, secret: bytes) -> Hand:
    """
    Finds the hand committed in `commitment`, given only the secret.

    Raises:
        WrongCommitmentError: if no hand matches.
    """
    for hand in Hand:
        if calculate_commitment(identity, hand, secret) == commitment:
            return hand

    raise WrongCommitmentError()
