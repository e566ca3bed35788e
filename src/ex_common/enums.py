"""Global enums — wire values match what the node stores and clients expect."""

from enum import Enum


class FeeType(str, Enum):
    FLAT = "FLAT"
    PERCENT = "PERCENT"


class SearchKind(str, Enum):
    """Entity kinds checked by /search, values are the legacy wire tags."""
    TX = "tx"
    ACCOUNT = "account"
    MACROBLOCK = "kblock"
    MICROBLOCK = "mblock"


class PendingFilter(str, Enum):
    ALL = "all"
    FROM = "from"
    TO = "to"


class HistoryDirection(str, Enum):
    ALL = "ALL"
    IN = "IN"
    OUT = "OUT"


class RewardType(str, Enum):
    KBLOCK = "kblock"
    MBLOCK = "mblock"
    SBLOCK = "sblock"
    REFERRAL = "ref"


class TokenListType(str, Enum):
    MINABLE = "minable"
    REISSUABLE = "reissuable"


class TxStatus(int, Enum):
    """transactions.status values written by the node."""
    REJECTED = 2
    SUCCESS = 3
