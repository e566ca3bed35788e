"""Arbitrary-precision ledger amounts.

Token quantities are non-negative integers in the token's smallest unit and
routinely exceed 2^63. They cross the API boundary as decimal strings, never
as floats.
"""

from dataclasses import dataclass
from decimal import Decimal
from functools import total_ordering

from src.ex_common.errors import ArithmeticUnderflowError, InvalidAmountError


@total_ordering
@dataclass(frozen=True)
class LedgerAmount:
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidAmountError(self.value)
        if self.value < 0:
            raise InvalidAmountError(self.value)

    @classmethod
    def parse(cls, raw: "LedgerAmount | int | str | Decimal") -> "LedgerAmount":
        """Build an amount from a storage or transport value.

        Accepts ints, decimal strings and integral Decimals (NUMERIC columns).
        """
        if isinstance(raw, LedgerAmount):
            return raw
        if isinstance(raw, bool):
            raise InvalidAmountError(raw)
        if isinstance(raw, int):
            return cls(raw)
        if isinstance(raw, str):
            text = raw.strip()
            if not (text.isascii() and text.isdigit()):
                raise InvalidAmountError(raw)
            return cls(int(text))
        if isinstance(raw, Decimal):
            if not raw.is_finite() or raw != raw.to_integral_value():
                raise InvalidAmountError(raw)
            return cls(int(raw))
        raise InvalidAmountError(raw)

    @classmethod
    def zero(cls) -> "LedgerAmount":
        return cls(0)

    def __add__(self, other: "LedgerAmount") -> "LedgerAmount":
        return LedgerAmount(self.value + other.value)

    def __sub__(self, other: "LedgerAmount") -> "LedgerAmount":
        if other.value > self.value:
            raise ArithmeticUnderflowError(self.value, other.value)
        return LedgerAmount(self.value - other.value)

    def __lt__(self, other: "LedgerAmount") -> bool:
        return self.value < other.value

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


def format_units(amount: LedgerAmount, decimals: int) -> str:
    """Render an amount in whole-token units: 250050000000 @ 10 -> '25.005'."""
    if decimals <= 0:
        return str(amount.value)
    whole, frac = divmod(amount.value, 10**decimals)
    frac_str = f"{frac:0{decimals}d}".rstrip("0")
    return f"{whole}.{frac_str}" if frac_str else str(whole)
