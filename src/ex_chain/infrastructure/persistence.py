"""ChainRepository — concrete implementation of ChainRepositoryProtocol.

All queries use raw text() SQL (no ORM) against the node schema.
The only write is update_max_tps, which keeps the node's running maximum in
the stat table; the caller commits.
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_chain.domain.models import TransactionRecord
from src.ex_common.amounts import LedgerAmount
from src.ex_common.enums import PendingFilter, TxStatus
from src.ex_common.pagination import Page, page_count, page_offset
from src.ex_common.rows import row_to_dict, rows_to_dicts
from src.ex_metrics.domain.models import TokenFeeSchedule

# ---------------------------------------------------------------------------
# SQL: blocks
# ---------------------------------------------------------------------------

_KBLOCK_COLUMNS = """
    k.hash, k.n, k.time, k.publisher, k.nonce, k.link, k.reward, k.target_diff,
    (SELECT COUNT(*) FROM mblocks m WHERE m.kblocks_hash = k.hash) AS mblocks_count,
    (SELECT COUNT(*) FROM transactions t
       JOIN mblocks m ON m.hash = t.mblocks_hash
      WHERE m.kblocks_hash = k.hash) AS tx_count
"""

_KBLOCK_PAGE_SQL = text(f"""
    SELECT {_KBLOCK_COLUMNS}
    FROM kblocks k
    ORDER BY k.n DESC
    LIMIT :limit OFFSET :offset
""")

_KBLOCK_COUNT_SQL = text("SELECT COUNT(*) FROM kblocks")

_GET_KBLOCK_SQL = text(f"""
    SELECT {_KBLOCK_COLUMNS}
    FROM kblocks k
    WHERE k.hash = :hash
""")

_GET_KBLOCK_BY_HEIGHT_SQL = text(f"""
    SELECT {_KBLOCK_COLUMNS}
    FROM kblocks k
    WHERE k.n = :height
""")

_GET_MBLOCK_SQL = text("""
    SELECT m.hash, m.kblocks_hash, k.n AS height, k.time, m.publisher, m.referrer,
           m.reward, m.nonce, m.token, m.sign, m.leader_sign, m.calculated
    FROM mblocks m
    JOIN kblocks k ON k.hash = m.kblocks_hash
    WHERE m.hash = :hash
""")

_MBLOCK_TXS_SQL = text("""
    SELECT hash, from_id AS "from", to_id AS "to", amount, token_hash,
           nonce, data, sign, status
    FROM transactions
    WHERE mblocks_hash = :hash
    ORDER BY hash
""")

_GET_SBLOCK_SQL = text("""
    SELECT s.hash, s.kblocks_hash, k.n AS height, s.publisher, s.reward,
           s.bulletin, s.sign, s.calculated
    FROM sblocks s
    JOIN kblocks k ON k.hash = s.kblocks_hash
    WHERE s.hash = :hash
""")

_LAST_KBLOCKS_SQL = text(f"""
    SELECT {_KBLOCK_COLUMNS}
    FROM kblocks k
    ORDER BY k.n DESC
    LIMIT :limit
""")

_LIST_MBLOCKS_SQL = text("""
    SELECT m.hash, m.kblocks_hash, k.n AS height, k.time, m.publisher,
           m.reward, m.token,
           (SELECT COUNT(*) FROM transactions t WHERE t.mblocks_hash = m.hash) AS tx_count
    FROM mblocks m
    JOIN kblocks k ON k.hash = m.kblocks_hash
    ORDER BY k.n DESC, m.hash
    LIMIT :limit OFFSET :offset
""")

_MBLOCKS_HEIGHT_SQL = text("""
    SELECT MAX(k.n)
    FROM mblocks m
    JOIN kblocks k ON k.hash = m.kblocks_hash
""")

# ---------------------------------------------------------------------------
# SQL: transactions
# ---------------------------------------------------------------------------

_LAST_TXS_SQL = text("""
    SELECT t.hash, k.n AS height, k.time, t.from_id AS "from", t.to_id AS "to",
           t.amount, t.token_hash, tk.ticker, t.status
    FROM transactions t
    JOIN tokens tk ON tk.hash = t.token_hash
    JOIN mblocks m ON m.hash = t.mblocks_hash
    JOIN kblocks k ON k.hash = m.kblocks_hash
    ORDER BY k.n DESC, t.hash
    LIMIT :limit
""")

_GET_TX_SQL = text("""
    SELECT t.hash, t.from_id, t.to_id, t.amount AS total_amount, t.token_hash,
           tk.ticker, t.status, t.mblocks_hash, k.n AS height, k.time,
           t.nonce, t.data, t.sign,
           tk.fee_type, tk.fee_value, tk.fee_min
    FROM transactions t
    JOIN tokens tk ON tk.hash = t.token_hash
    LEFT JOIN mblocks m ON m.hash = t.mblocks_hash
    LEFT JOIN kblocks k ON k.hash = m.kblocks_hash
    WHERE t.hash = :hash
""")

_SUCCESS_TXS_BY_HEIGHT_SQL = text("""
    SELECT t.hash, t.from_id AS "from", t.to_id AS "to", t.amount, t.token_hash,
           t.nonce, t.data, t.mblocks_hash
    FROM transactions t
    JOIN mblocks m ON m.hash = t.mblocks_hash
    JOIN kblocks k ON k.hash = m.kblocks_hash
    WHERE k.n = :height AND t.status = :status
    ORDER BY t.hash
""")

_TPS_SQL = text("""
    SELECT CAST(COUNT(t.hash) AS DOUBLE PRECISION) / CAST(:window AS DOUBLE PRECISION)
    FROM transactions t
    JOIN mblocks m ON m.hash = t.mblocks_hash
    JOIN kblocks k ON k.hash = m.kblocks_hash
    WHERE k.time > CAST(EXTRACT(EPOCH FROM NOW()) AS BIGINT) - CAST(:window AS BIGINT)
""")

_UPDATE_MAX_TPS_SQL = text("""
    UPDATE stat
    SET value = CAST(CAST(:tps AS BIGINT) AS TEXT)
    WHERE key = 'max_tps' AND CAST(value AS BIGINT) < CAST(:tps AS BIGINT)
""")

# ---------------------------------------------------------------------------
# SQL: pending pool
# ---------------------------------------------------------------------------

_PENDING_SIZE_SQL = text("SELECT COUNT(*) FROM pending")

_PENDING_COLUMNS = """
    hash, from_id AS "from", to_id AS "to", amount, token_hash,
    nonce, data, sign, timeadded
"""

_PENDING_BY_HASH_SQL = text(f"""
    SELECT {_PENDING_COLUMNS}
    FROM pending
    WHERE hash = :hash
""")

_PENDING_BY_ACCOUNT_SQL = text(f"""
    SELECT {_PENDING_COLUMNS}
    FROM pending
    WHERE (CAST(:filter AS TEXT) <> 'to' AND from_id = :account_id)
       OR (CAST(:filter AS TEXT) <> 'from' AND to_id = :account_id)
    ORDER BY timeadded DESC, hash
""")


def _row_to_tx(row: Any) -> TransactionRecord:
    return TransactionRecord(
        hash=row.hash,
        from_id=row.from_id,
        to_id=row.to_id,
        total_amount=LedgerAmount.parse(row.total_amount),
        token_hash=row.token_hash,
        ticker=row.ticker,
        status=row.status,
        mblocks_hash=row.mblocks_hash,
        height=row.height,
        time=row.time,
        nonce=row.nonce,
        data=row.data,
        sign=row.sign,
        fee_schedule=TokenFeeSchedule.from_row(row.fee_type, row.fee_value, row.fee_min),
    )


class ChainRepository:
    """Concrete repository — blocks, transactions and the pending pool."""

    async def get_kblock_page(
        self, db: AsyncSession, page: int, page_size: int
    ) -> Page:
        rows = (
            await db.execute(
                _KBLOCK_PAGE_SQL,
                {"limit": page_size, "offset": page_offset(page, page_size)},
            )
        ).fetchall()
        total = (await db.execute(_KBLOCK_COUNT_SQL)).scalar_one()
        return Page(records=rows_to_dicts(rows), page_count=page_count(total, page_size))

    async def get_kblock(self, db: AsyncSession, block_hash: str) -> dict[str, Any] | None:
        row = (await db.execute(_GET_KBLOCK_SQL, {"hash": block_hash})).fetchone()
        return row_to_dict(row) if row else None

    async def get_kblock_by_height(
        self, db: AsyncSession, height: int
    ) -> dict[str, Any] | None:
        row = (await db.execute(_GET_KBLOCK_BY_HEIGHT_SQL, {"height": height})).fetchone()
        return row_to_dict(row) if row else None

    async def get_mblock(self, db: AsyncSession, block_hash: str) -> dict[str, Any] | None:
        row = (await db.execute(_GET_MBLOCK_SQL, {"hash": block_hash})).fetchone()
        if row is None:
            return None
        txs = (await db.execute(_MBLOCK_TXS_SQL, {"hash": block_hash})).fetchall()
        return {**row_to_dict(row), "txs": rows_to_dicts(txs)}

    async def get_sblock(self, db: AsyncSession, block_hash: str) -> dict[str, Any] | None:
        row = (await db.execute(_GET_SBLOCK_SQL, {"hash": block_hash})).fetchone()
        return row_to_dict(row) if row else None

    async def list_last_kblocks(self, db: AsyncSession, limit: int) -> list[dict[str, Any]]:
        rows = (await db.execute(_LAST_KBLOCKS_SQL, {"limit": limit})).fetchall()
        return rows_to_dicts(rows)

    async def list_last_txs(self, db: AsyncSession, limit: int) -> list[dict[str, Any]]:
        rows = (await db.execute(_LAST_TXS_SQL, {"limit": limit})).fetchall()
        return rows_to_dicts(rows)

    async def get_tx(self, db: AsyncSession, tx_hash: str) -> TransactionRecord | None:
        row = (await db.execute(_GET_TX_SQL, {"hash": tx_hash})).fetchone()
        return _row_to_tx(row) if row else None

    async def list_success_txs_by_height(
        self, db: AsyncSession, height: int
    ) -> list[dict[str, Any]]:
        rows = (
            await db.execute(
                _SUCCESS_TXS_BY_HEIGHT_SQL,
                {"height": height, "status": TxStatus.SUCCESS.value},
            )
        ).fetchall()
        return rows_to_dicts(rows)

    async def list_mblocks(
        self, db: AsyncSession, offset: int, limit: int
    ) -> list[dict[str, Any]]:
        rows = (
            await db.execute(_LIST_MBLOCKS_SQL, {"offset": offset, "limit": limit})
        ).fetchall()
        return rows_to_dicts(rows)

    async def get_mblocks_height(self, db: AsyncSession) -> int | None:
        return (await db.execute(_MBLOCKS_HEIGHT_SQL)).scalar_one_or_none()

    async def get_tps(self, db: AsyncSession, window_seconds: int) -> float:
        tps = (await db.execute(_TPS_SQL, {"window": window_seconds})).scalar_one()
        return float(tps or 0)

    async def update_max_tps(self, db: AsyncSession, tps: int) -> None:
        await db.execute(_UPDATE_MAX_TPS_SQL, {"tps": tps})

    async def get_pending_size(self, db: AsyncSession) -> int:
        return (await db.execute(_PENDING_SIZE_SQL)).scalar_one()

    async def get_pending_by_hash(
        self, db: AsyncSession, tx_hash: str
    ) -> dict[str, Any] | None:
        row = (await db.execute(_PENDING_BY_HASH_SQL, {"hash": tx_hash})).fetchone()
        return row_to_dict(row) if row else None

    async def list_pending_by_account(
        self, db: AsyncSession, account_id: str, pending_filter: PendingFilter
    ) -> list[dict[str, Any]]:
        rows = (
            await db.execute(
                _PENDING_BY_ACCOUNT_SQL,
                {"account_id": account_id, "filter": pending_filter.value},
            )
        ).fetchall()
        return rows_to_dicts(rows)
