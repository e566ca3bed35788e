"""AccountRepository — concrete implementation of AccountRepositoryProtocol.

Read-only queries against the node schema, raw text() SQL (no ORM).
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_account.domain.models import (
    AccountHistoryRecord,
    DelegatedBalance,
    TokenBalance,
)
from src.ex_common.amounts import LedgerAmount
from src.ex_common.enums import HistoryDirection, RewardType, TxStatus
from src.ex_common.pagination import Page, page_count, page_offset
from src.ex_common.rows import rows_to_dicts
from src.ex_metrics.domain.models import TokenFeeSchedule

# ---------------------------------------------------------------------------
# SQL: history
# ---------------------------------------------------------------------------

_HISTORY_FILTER = """
    FROM transactions t
    JOIN tokens tk ON tk.hash = t.token_hash
    JOIN mblocks m ON m.hash = t.mblocks_hash
    JOIN kblocks k ON k.hash = m.kblocks_hash
    WHERE t.status = :status
      AND (
        (CAST(:direction AS TEXT) <> 'OUT' AND t.to_id = :account_id)
        OR (CAST(:direction AS TEXT) <> 'IN' AND t.from_id = :account_id)
      )
"""

_LIST_HISTORY_SQL = text(f"""
    SELECT t.hash, k.time, t.token_hash, tk.ticker,
           CASE WHEN CAST(:direction AS TEXT) <> 'OUT' AND t.to_id = :account_id
                THEN t.amount END AS input,
           CASE WHEN CAST(:direction AS TEXT) <> 'IN' AND t.from_id = :account_id
                THEN t.amount END AS output,
           tk.fee_type, tk.fee_value, tk.fee_min
    {_HISTORY_FILTER}
    ORDER BY k.n DESC, t.hash
    LIMIT :limit OFFSET :offset
""")

_COUNT_HISTORY_SQL = text(f"SELECT COUNT(*) {_HISTORY_FILTER}")

_LIST_TRANSACTIONS_SQL = text("""
    SELECT t.hash, k.n AS height, k.time, t.from_id AS "from", t.to_id AS "to",
           t.amount, t.token_hash, tk.ticker, t.status, t.nonce, t.data
    FROM transactions t
    JOIN tokens tk ON tk.hash = t.token_hash
    JOIN mblocks m ON m.hash = t.mblocks_hash
    JOIN kblocks k ON k.hash = m.kblocks_hash
    WHERE t.from_id = :account_id OR t.to_id = :account_id
    ORDER BY k.n DESC, t.hash
    LIMIT :limit OFFSET :offset
""")

_COUNT_TRANSACTIONS_SQL = text("""
    SELECT COUNT(*) FROM transactions
    WHERE from_id = :account_id OR to_id = :account_id
""")

_LIST_REWARDS_SQL = text("""
    SELECT r.block_hash AS hash, r.type, r.token_hash, r.amount, r.time
    FROM rewards r
    WHERE r.id = :account_id
      AND (CAST(:reward_type AS TEXT) IS NULL OR r.type = CAST(:reward_type AS TEXT))
    ORDER BY r.time DESC, r.block_hash
    LIMIT :limit OFFSET :offset
""")

_COUNT_REWARDS_SQL = text("""
    SELECT COUNT(*) FROM rewards
    WHERE id = :account_id
      AND (CAST(:reward_type AS TEXT) IS NULL OR type = CAST(:reward_type AS TEXT))
""")

# ---------------------------------------------------------------------------
# SQL: balances
# ---------------------------------------------------------------------------

_GET_BALANCE_SQL = text("""
    SELECT l.id, l.token_hash, tk.ticker, tk.decimals, l.amount
    FROM ledger l
    JOIN tokens tk ON tk.hash = l.token_hash
    WHERE l.id = :account_id AND l.token_hash = :token_hash
""")

_DELEGATED_SQL = text("""
    SELECT COALESCE(SUM(amount), 0) AS delegated,
           COALESCE(SUM(reward), 0) AS reward
    FROM delegates
    WHERE delegator = :account_id
""")

_TRANSIT_SQL = text("""
    SELECT COALESCE(SUM(amount), 0)
    FROM undelegates
    WHERE delegator = :account_id AND transferred = FALSE
""")

_UNDELEGATED_SQL = text("""
    SELECT COALESCE(SUM(amount), 0)
    FROM undelegates
    WHERE delegator = :account_id
""")

_LIST_BALANCES_SQL = text("""
    SELECT l.token_hash AS token, l.amount, tk.ticker, tk.decimals,
           tk.minable, tk.reissuable
    FROM ledger l
    JOIN tokens tk ON tk.hash = l.token_hash
    WHERE l.id = :account_id
      AND (:minable_only = FALSE OR tk.minable = TRUE)
      AND (:reissuable_only = FALSE OR tk.reissuable = TRUE)
    ORDER BY tk.ticker
""")


def _amount_or_none(raw: Any) -> LedgerAmount | None:
    return None if raw is None else LedgerAmount.parse(raw)


def _row_to_history(row: Any) -> AccountHistoryRecord:
    return AccountHistoryRecord(
        hash=row.hash,
        time=row.time,
        token_hash=row.token_hash,
        ticker=row.ticker,
        input=_amount_or_none(row.input),
        output=_amount_or_none(row.output),
        fee_schedule=TokenFeeSchedule.from_row(row.fee_type, row.fee_value, row.fee_min),
    )


class AccountRepository:
    """Concrete repository — read-only."""

    async def list_history(
        self,
        db: AsyncSession,
        account_id: str,
        direction: HistoryDirection,
        page: int,
        page_size: int,
    ) -> Page:
        params = {
            "account_id": account_id,
            "direction": direction.value,
            "status": TxStatus.SUCCESS.value,
        }
        rows = (
            await db.execute(
                _LIST_HISTORY_SQL,
                {**params, "limit": page_size, "offset": page_offset(page, page_size)},
            )
        ).fetchall()
        total = (await db.execute(_COUNT_HISTORY_SQL, params)).scalar_one()
        return Page(
            records=[_row_to_history(r) for r in rows],
            page_count=page_count(total, page_size),
        )

    async def list_transactions(
        self, db: AsyncSession, account_id: str, page: int, page_size: int
    ) -> Page:
        rows = (
            await db.execute(
                _LIST_TRANSACTIONS_SQL,
                {
                    "account_id": account_id,
                    "limit": page_size,
                    "offset": page_offset(page, page_size),
                },
            )
        ).fetchall()
        total = (
            await db.execute(_COUNT_TRANSACTIONS_SQL, {"account_id": account_id})
        ).scalar_one()
        return Page(records=rows_to_dicts(rows), page_count=page_count(total, page_size))

    async def list_rewards(
        self,
        db: AsyncSession,
        account_id: str,
        reward_type: RewardType | None,
        page: int,
        page_size: int,
    ) -> Page:
        params = {
            "account_id": account_id,
            "reward_type": reward_type.value if reward_type else None,
        }
        rows = (
            await db.execute(
                _LIST_REWARDS_SQL,
                {**params, "limit": page_size, "offset": page_offset(page, page_size)},
            )
        ).fetchall()
        total = (await db.execute(_COUNT_REWARDS_SQL, params)).scalar_one()
        return Page(records=rows_to_dicts(rows), page_count=page_count(total, page_size))

    async def get_balance(
        self, db: AsyncSession, account_id: str, token_hash: str
    ) -> TokenBalance | None:
        row = (
            await db.execute(
                _GET_BALANCE_SQL, {"account_id": account_id, "token_hash": token_hash}
            )
        ).fetchone()
        if row is None:
            return None
        return TokenBalance(
            account_id=row.id,
            token_hash=row.token_hash,
            ticker=row.ticker,
            decimals=row.decimals,
            amount=LedgerAmount.parse(row.amount),
        )

    async def get_delegated_balance(
        self, db: AsyncSession, account_id: str
    ) -> DelegatedBalance:
        row = (await db.execute(_DELEGATED_SQL, {"account_id": account_id})).fetchone()
        return DelegatedBalance(
            delegated=LedgerAmount.parse(row.delegated),
            reward=LedgerAmount.parse(row.reward),
        )

    async def get_transit_balance(
        self, db: AsyncSession, account_id: str
    ) -> LedgerAmount:
        total = (await db.execute(_TRANSIT_SQL, {"account_id": account_id})).scalar_one()
        return LedgerAmount.parse(total)

    async def get_undelegated_balance(
        self, db: AsyncSession, account_id: str
    ) -> LedgerAmount:
        total = (
            await db.execute(_UNDELEGATED_SQL, {"account_id": account_id})
        ).scalar_one()
        return LedgerAmount.parse(total)

    async def list_balances(
        self,
        db: AsyncSession,
        account_id: str,
        minable_only: bool = False,
        reissuable_only: bool = False,
    ) -> list[dict[str, Any]]:
        rows = (
            await db.execute(
                _LIST_BALANCES_SQL,
                {
                    "account_id": account_id,
                    "minable_only": minable_only,
                    "reissuable_only": reissuable_only,
                },
            )
        ).fetchall()
        return rows_to_dicts(rows)
