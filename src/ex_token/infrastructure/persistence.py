"""TokenRepository — concrete implementation of TokenRepositoryProtocol.

All queries use raw text() SQL (no ORM).
"""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.ex_common.amounts import LedgerAmount
from src.ex_common.enums import TokenListType
from src.ex_common.pagination import Page, page_count, page_offset
from src.ex_common.rows import rows_to_dicts
from src.ex_metrics.domain.models import ShareEntry

_TOKEN_COLUMNS = """
    hash, ticker, caption, owner, decimals, total_supply, max_supply,
    fee_type, fee_value, fee_min, minable, reissuable, referrer_stake
"""

# ---------------------------------------------------------------------------
# SQL: holders
# ---------------------------------------------------------------------------

_TOP_HOLDERS_SQL = text("""
    SELECT id, amount
    FROM ledger
    WHERE token_hash = :token_hash AND amount > 0
    ORDER BY amount DESC, id
    LIMIT :limit OFFSET :offset
""")

_HOLDER_COUNT_SQL = text("""
    SELECT COUNT(*) FROM ledger WHERE token_hash = :token_hash AND amount > 0
""")

_TOTAL_SUPPLY_SQL = text("SELECT total_supply FROM tokens WHERE hash = :token_hash")

# ---------------------------------------------------------------------------
# SQL: token catalog
# ---------------------------------------------------------------------------

# :list_type NULL selects every token.
_TOKEN_FILTER = """
    FROM tokens
    WHERE CAST(:list_type AS TEXT) IS NULL
       OR (CAST(:list_type AS TEXT) = 'minable' AND minable = TRUE)
       OR (CAST(:list_type AS TEXT) = 'reissuable' AND reissuable = TRUE)
"""

_TOKEN_PAGE_SQL = text(f"""
    SELECT {_TOKEN_COLUMNS}
    {_TOKEN_FILTER}
    ORDER BY ticker, hash
    LIMIT :limit OFFSET :offset
""")

_TOKEN_PAGE_COUNT_SQL = text(f"SELECT COUNT(*) {_TOKEN_FILTER}")

_TOKENS_BY_OWNER_SQL = text(f"""
    SELECT {_TOKEN_COLUMNS} FROM tokens WHERE owner = :owner ORDER BY ticker, hash
""")

_TOKEN_INFO_SQL = text(f"SELECT {_TOKEN_COLUMNS} FROM tokens WHERE hash = :token_hash")

_TOKEN_COUNT_SQL = text("SELECT COUNT(*) FROM tokens")

_TICKERS_SQL = text("SELECT hash, ticker FROM tokens ORDER BY ticker, hash")


class TokenRepository:
    """Concrete repository — token catalog and holders."""

    async def list_top_holders(
        self, db: AsyncSession, token_hash: str, page: int, page_size: int
    ) -> Page:
        rows = (
            await db.execute(
                _TOP_HOLDERS_SQL,
                {
                    "token_hash": token_hash,
                    "limit": page_size,
                    "offset": page_offset(page, page_size),
                },
            )
        ).fetchall()
        total = await self.count_holders(db, token_hash)
        return Page(
            records=[ShareEntry(subject_id=r.id, amount=LedgerAmount.parse(r.amount)) for r in rows],
            page_count=page_count(total, page_size),
        )

    async def get_total_supply(
        self, db: AsyncSession, token_hash: str
    ) -> LedgerAmount | None:
        value = (
            await db.execute(_TOTAL_SUPPLY_SQL, {"token_hash": token_hash})
        ).scalar_one_or_none()
        return LedgerAmount.parse(value) if value is not None else None

    async def get_token_info_page(
        self,
        db: AsyncSession,
        page: int,
        page_size: int,
        list_type: TokenListType | None,
    ) -> Page:
        type_value = list_type.value if list_type else None
        rows = (
            await db.execute(
                _TOKEN_PAGE_SQL,
                {
                    "list_type": type_value,
                    "limit": page_size,
                    "offset": page_offset(page, page_size),
                },
            )
        ).fetchall()
        total = (
            await db.execute(_TOKEN_PAGE_COUNT_SQL, {"list_type": type_value})
        ).scalar_one()
        return Page(records=rows_to_dicts(rows), page_count=page_count(total, page_size))

    async def list_tokens_by_owner(
        self, db: AsyncSession, owner: str
    ) -> list[dict[str, Any]]:
        rows = (await db.execute(_TOKENS_BY_OWNER_SQL, {"owner": owner})).fetchall()
        return rows_to_dicts(rows)

    async def get_token_info(self, db: AsyncSession, token_hash: str) -> list[dict[str, Any]]:
        rows = (await db.execute(_TOKEN_INFO_SQL, {"token_hash": token_hash})).fetchall()
        return rows_to_dicts(rows)

    async def count_tokens(self, db: AsyncSession) -> int:
        return (await db.execute(_TOKEN_COUNT_SQL)).scalar_one()

    async def count_holders(self, db: AsyncSession, token_hash: str) -> int:
        return (
            await db.execute(_HOLDER_COUNT_SQL, {"token_hash": token_hash})
        ).scalar_one()

    async def list_tickers(self, db: AsyncSession) -> list[dict[str, Any]]:
        return rows_to_dicts((await db.execute(_TICKERS_SQL)).fetchall())
