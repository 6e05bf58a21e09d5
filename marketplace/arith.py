from marketplace.config import BALANCE_MAX, QUANTITY_MAX
from marketplace.errors import Conversion


def check_quantity(quantity: int) -> int:
    if not 0 <= quantity <= QUANTITY_MAX:
        raise ValueError(f"Quantity {quantity} is outside the unsigned 128-bit range")
    return quantity


def check_balance(amount: int) -> int:
    if not 0 <= amount <= BALANCE_MAX:
        raise ValueError(f"Amount {amount} is outside the balance range [0, {BALANCE_MAX}]")
    return amount


def to_balance(quantity: int) -> int:
    """Convert a quantity into the balance type, or raise Conversion."""
    if quantity > BALANCE_MAX:
        raise Conversion(f"Quantity {quantity} does not fit the {BALANCE_MAX.bit_length()}-bit balance type")
    return quantity


def saturating_mul(a: int, b: int) -> int:
    """Product of two balances, clamped to BALANCE_MAX instead of overflowing."""
    return min(a * b, BALANCE_MAX)
