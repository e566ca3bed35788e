"""Domain models for ex_stats — pure dataclasses."""

from dataclasses import dataclass

from src.ex_common.amounts import LedgerAmount

# Node-maintained stat keys read by the explorer.
STAT_VERSION = "ver"
STAT_CIRCULATING_SUPPLY = "csup"
STAT_NETWORK_HASHRATE = "network_hashrate"

# Stat values that are not integers (prices, fractional difficulty).
PASSTHROUGH_STAT_KEYS = frozenset({"cg_btc", "cg_eth", "cg_usd", "difficulty"})


@dataclass(frozen=True)
class NativeSupply:
    decimals: int
    total_supply: LedgerAmount
    max_supply: LedgerAmount
