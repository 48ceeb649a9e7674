from decimal import Decimal, Inexact, InvalidOperation, localcontext
import hashlib

# base units in one coin
UNIT: int = 10**18

ADDRESS_LEN: int = 20
SECRET_LEN: int = 32

# reserved identity, never a participant; recorded as winner on ties and cancellations
NO_WINNER: bytes = bytes(ADDRESS_LEN)


def parse_amount(amount: str | int | Decimal) -> int:
    """Convert a decimal amount of coins (e.g. "0.1") into base units."""
    try:
        coins = Decimal(amount)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount}")
    if not coins.is_finite():
        raise ValueError(f"Invalid amount: {amount}")

    # the product is exact: the context keeps every digit of the input
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(coins.as_tuple().digits) + 19)
        ctx.traps[Inexact] = True
        value = coins * UNIT

    if value != value.to_integral_value():
        raise ValueError(f"Amount has too many decimal places: {amount}")
    if value < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
    return int(value)


def format_amount(value: int) -> str:
    """Inverse of parse_amount, without trailing zeros."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(str(value)) + 1)
        s = format(Decimal(value) / UNIT, "f")
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def format_secret(text: str) -> bytes:
    """Encodes a short string as a 32-byte secret, right-padded with zeros."""
    data = text.encode("utf-8")
    if len(data) > SECRET_LEN - 1:
        raise ValueError("The secret text must be at most 31 bytes long")
    return data + bytes(SECRET_LEN - len(data))


def address_from_name(name: str) -> bytes:
    """Deterministic identity for named accounts (demos and tests)."""
    return hashlib.sha256(name.encode("utf-8")).digest()[-ADDRESS_LEN:]


def check_address(address: bytes) -> bytes:
    if not isinstance(address, bytes) or len(address) != ADDRESS_LEN:
        raise ValueError(f"An address must be {ADDRESS_LEN} bytes long")
    return address


def check_amount(value: int) -> int:
    if not isinstance(value, int) or value < 0:
        raise ValueError(f"Invalid amount: {value}")
    return value
