"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Amounts
  2xxx: Account
  3xxx: Chain (blocks, transactions)
  4xxx: Staking
  5xxx: Token / shares
  9xxx: System

Client-facing errors keep http_status < 500 (several use 200 so that legacy
clients reading the error body keep working). Anything >= 500 is an internal
fault: its message is logged, never returned.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)

    @property
    def is_internal(self) -> bool:
        return self.http_status >= 500


# --- 1xxx: Amounts ---

class InvalidAmountError(AppError):
    def __init__(self, value: object) -> None:
        super().__init__(1001, f"Invalid ledger amount: {value!r}", 200)


class ArithmeticUnderflowError(AppError):
    def __init__(self, minuend: int, subtrahend: int) -> None:
        super().__init__(
            1002,
            f"Ledger amount underflow: {minuend} - {subtrahend} is negative",
            500,
        )


# --- 3xxx: Chain ---

class TransactionNotFoundError(AppError):
    def __init__(self, tx_hash: str) -> None:
        super().__init__(3001, f"Transaction not found: {tx_hash}", 404)


class TxBatchSizeError(AppError):
    def __init__(self) -> None:
        super().__init__(3002, "Only 1 TX can be sent", 200)


# --- 4xxx: Staking ---

class OutOfRangeError(AppError):
    def __init__(self, stake: int) -> None:
        super().__init__(4001, f"Stake value is out of range: {stake}", 200)


class StakeNotSpecifiedError(AppError):
    def __init__(self) -> None:
        super().__init__(4002, "Stake not specified", 200)


class PreconditionViolatedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4003, f"Precondition violated: {detail}", 500)


# --- 5xxx: Token / shares ---

class DivisionByZeroError(AppError):
    def __init__(self, what: str) -> None:
        super().__init__(5001, f"Cannot compute {what}: total is zero", 200)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
