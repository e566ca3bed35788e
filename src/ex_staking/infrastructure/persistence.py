"""StakingRepository — concrete implementation of StakingRepositoryProtocol.

All queries use raw text() SQL (no ORM).
List queries double as page queries: a NULL :limit means LIMIT ALL.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_common.amounts import LedgerAmount
from src.ex_common.pagination import Page, page_count, page_offset
from src.ex_common.rows import row_to_dict, rows_to_dicts
from src.ex_metrics.domain.models import YieldCurvePoint
from src.ex_staking.domain.models import PosStake

# ---------------------------------------------------------------------------
# SQL: yield curve and limits
# ---------------------------------------------------------------------------

# Ascending by stake: the interpolation walk relies on this order.
_ROI_CURVE_SQL = text("""
    SELECT stake, roi
    FROM rois
    WHERE token_hash = :token_hash
    ORDER BY stake ASC
""")

_REFERRER_STAKE_SQL = text("""
    SELECT referrer_stake FROM tokens WHERE hash = :token_hash
""")

_STAKING_POA_COUNT_SQL = text("""
    SELECT COUNT(DISTINCT c.pub)
    FROM clients c
    JOIN ledger l ON l.id = c.pub AND l.token_hash = :token_hash
    WHERE c.type = 'poa' AND l.amount >= :min_stake
""")

# ---------------------------------------------------------------------------
# SQL: PoS contracts
# ---------------------------------------------------------------------------

_POS_STAKE_COLUMNS = """
    p.id AS pos_id, p.owner, p.name, p.fee, p.active,
    COALESCE((SELECT SUM(d.amount) FROM delegates d WHERE d.pos_id = p.id), 0) AS stake
"""

_TOP_POS_SQL = text(f"""
    SELECT {_POS_STAKE_COLUMNS}
    FROM poses p
    ORDER BY stake DESC, p.id
    LIMIT :limit
""")

_TOTAL_POS_STAKE_SQL = text("SELECT COALESCE(SUM(amount), 0) FROM delegates")

_ACTIVE_TOTAL_POS_STAKE_SQL = text("""
    SELECT COALESCE(SUM(d.amount), 0)
    FROM delegates d
    JOIN poses p ON p.id = d.pos_id
    WHERE p.active = TRUE
""")

_POS_COUNT_SQL = text("SELECT COUNT(*) FROM poses")

_POS_PAGE_SQL = text(f"""
    SELECT {_POS_STAKE_COLUMNS}
    FROM poses p
    ORDER BY stake DESC, p.id
    LIMIT CAST(:limit AS BIGINT) OFFSET :offset
""")

_POS_INFO_SQL = text(f"""
    SELECT {_POS_STAKE_COLUMNS},
           (SELECT COUNT(*) FROM delegates d
             WHERE d.pos_id = p.id AND d.amount > 0) AS delegators_count
    FROM poses p
    WHERE p.id = :pos_id
""")

_POS_BY_OWNER_SQL = text(f"""
    SELECT {_POS_STAKE_COLUMNS}
    FROM poses p
    WHERE p.owner = :owner
    ORDER BY p.id
""")

_POS_NAMES_SQL = text("""
    SELECT id AS pos_id, name AS pos_name FROM poses ORDER BY id
""")

# ---------------------------------------------------------------------------
# SQL: delegation
# ---------------------------------------------------------------------------

_DELEGATED_SQL = text("""
    SELECT pos_id, amount, reward
    FROM delegates
    WHERE delegator = :delegator AND amount > 0
    ORDER BY pos_id
    LIMIT CAST(:limit AS BIGINT) OFFSET :offset
""")

_DELEGATED_COUNT_SQL = text("""
    SELECT COUNT(*) FROM delegates WHERE delegator = :delegator AND amount > 0
""")

_UNDELEGATED_SQL = text("""
    SELECT u.id AS tx_hash, u.pos_id, u.amount, u.height, k.time AS timestamp
    FROM undelegates u
    LEFT JOIN kblocks k ON k.n = u.height
    WHERE u.delegator = :delegator AND u.amount > 0
    ORDER BY u.height DESC, u.id
    LIMIT CAST(:limit AS BIGINT) OFFSET :offset
""")

_UNDELEGATED_COUNT_SQL = text("""
    SELECT COUNT(*) FROM undelegates WHERE delegator = :delegator AND amount > 0
""")

_DELEGATORS_SQL = text("""
    SELECT delegator, amount
    FROM delegates
    WHERE pos_id = :pos_id AND amount > 0
    ORDER BY amount DESC, delegator
    LIMIT CAST(:limit AS BIGINT) OFFSET :offset
""")

_DELEGATORS_COUNT_SQL = text("""
    SELECT COUNT(*) FROM delegates WHERE pos_id = :pos_id AND amount > 0
""")


def _row_to_curve_point(row: Any) -> YieldCurvePoint:
    return YieldCurvePoint(
        stake=LedgerAmount.parse(row.stake),
        roi=Decimal(str(row.roi)),
    )


def _row_to_pos_stake(row: Any) -> PosStake:
    return PosStake(
        pos_id=row.pos_id,
        owner=row.owner,
        name=row.name,
        fee=row.fee,
        stake=LedgerAmount.parse(row.stake),
    )


def _window(page: int | None, page_size: int) -> dict[str, int | None]:
    if page is None:
        return {"limit": None, "offset": 0}
    return {"limit": page_size, "offset": page_offset(page, page_size)}


class StakingRepository:
    """Concrete repository — staking reads."""

    async def get_roi_curve(
        self, db: AsyncSession, token_hash: str
    ) -> list[YieldCurvePoint]:
        rows = (await db.execute(_ROI_CURVE_SQL, {"token_hash": token_hash})).fetchall()
        return [_row_to_curve_point(r) for r in rows]

    async def get_referrer_stake(
        self, db: AsyncSession, token_hash: str
    ) -> LedgerAmount | None:
        value = (
            await db.execute(_REFERRER_STAKE_SQL, {"token_hash": token_hash})
        ).scalar_one_or_none()
        return LedgerAmount.parse(value) if value is not None else None

    async def count_staking_poa(
        self, db: AsyncSession, token_hash: str, min_stake: LedgerAmount
    ) -> int:
        return (
            await db.execute(
                _STAKING_POA_COUNT_SQL,
                {"token_hash": token_hash, "min_stake": min_stake.value},
            )
        ).scalar_one()

    async def list_top_pos(self, db: AsyncSession, limit: int) -> list[PosStake]:
        rows = (await db.execute(_TOP_POS_SQL, {"limit": limit})).fetchall()
        return [_row_to_pos_stake(r) for r in rows]

    async def get_total_pos_stake(self, db: AsyncSession) -> LedgerAmount:
        return LedgerAmount.parse((await db.execute(_TOTAL_POS_STAKE_SQL)).scalar_one())

    async def get_active_total_pos_stake(self, db: AsyncSession) -> LedgerAmount:
        return LedgerAmount.parse(
            (await db.execute(_ACTIVE_TOTAL_POS_STAKE_SQL)).scalar_one()
        )

    async def count_pos(self, db: AsyncSession) -> int:
        return (await db.execute(_POS_COUNT_SQL)).scalar_one()

    async def get_pos_page(self, db: AsyncSession, page: int, page_size: int) -> Page:
        rows = (await db.execute(_POS_PAGE_SQL, _window(page, page_size))).fetchall()
        total = await self.count_pos(db)
        return Page(records=rows_to_dicts(rows), page_count=page_count(total, page_size))

    async def get_pos_info(self, db: AsyncSession, pos_id: str) -> dict[str, Any] | None:
        row = (await db.execute(_POS_INFO_SQL, {"pos_id": pos_id})).fetchone()
        return row_to_dict(row) if row else None

    async def list_pos_all(self, db: AsyncSession) -> list[dict[str, Any]]:
        rows = (await db.execute(_POS_PAGE_SQL, _window(None, 0))).fetchall()
        return rows_to_dicts(rows)

    async def list_pos_by_owner(
        self, db: AsyncSession, owner: str
    ) -> list[dict[str, Any]]:
        rows = (await db.execute(_POS_BY_OWNER_SQL, {"owner": owner})).fetchall()
        return rows_to_dicts(rows)

    async def list_pos_names(self, db: AsyncSession) -> list[dict[str, Any]]:
        return rows_to_dicts((await db.execute(_POS_NAMES_SQL)).fetchall())

    async def list_delegated(
        self, db: AsyncSession, delegator: str, page: int | None, page_size: int
    ) -> Page:
        return await self._paged(
            db, _DELEGATED_SQL, _DELEGATED_COUNT_SQL,
            {"delegator": delegator}, page, page_size,
        )

    async def list_undelegated(
        self, db: AsyncSession, delegator: str, page: int | None, page_size: int
    ) -> Page:
        return await self._paged(
            db, _UNDELEGATED_SQL, _UNDELEGATED_COUNT_SQL,
            {"delegator": delegator}, page, page_size,
        )

    async def list_delegators(
        self, db: AsyncSession, pos_id: str, page: int | None, page_size: int
    ) -> Page:
        return await self._paged(
            db, _DELEGATORS_SQL, _DELEGATORS_COUNT_SQL,
            {"pos_id": pos_id}, page, page_size,
        )

    async def _paged(
        self,
        db: AsyncSession,
        list_sql: Any,
        count_sql: Any,
        params: dict[str, Any],
        page: int | None,
        page_size: int,
    ) -> Page:
        rows = (await db.execute(list_sql, {**params, **_window(page, page_size)})).fetchall()
        if page is None:
            return Page(records=rows_to_dicts(rows), page_count=1)
        total = (await db.execute(count_sql, params)).scalar_one()
        return Page(records=rows_to_dicts(rows), page_count=page_count(total, page_size))
