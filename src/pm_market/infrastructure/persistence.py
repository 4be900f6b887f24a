"""MarketRepository — concrete implementation of MarketRepositoryProtocol.

All queries use raw text() SQL (no ORM).
Per-outcome columns are NUMERIC(78,0)[] arrays in Outcome ordinal order.
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.enums import Outcome
from src.pm_market.domain.models import Market

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COLUMNS = """
    id, creator, token_address, initial_price, created_at, settlement_time,
    settled, winning_outcome, final_price,
    total_shares, total_volume, position_tokens
"""

_NEXT_ID_SQL = text("SELECT nextval('markets_id_seq')")

_GET_MARKET_SQL = text(f"SELECT {_COLUMNS} FROM markets WHERE id = :market_id")

_GET_MARKET_FOR_UPDATE_SQL = text(
    f"SELECT {_COLUMNS} FROM markets WHERE id = :market_id FOR UPDATE"
)

_INSERT_MARKET_SQL = text("""
    INSERT INTO markets (
        id, creator, token_address, initial_price, created_at, settlement_time,
        settled, winning_outcome, final_price,
        total_shares, total_volume, position_tokens
    ) VALUES (
        :id, :creator, :token_address, :initial_price, :created_at, :settlement_time,
        :settled, :winning_outcome, :final_price,
        :total_shares, :total_volume, :position_tokens
    )
""")

# creator/token_address/initial_price/created_at/settlement_time are immutable
_UPDATE_MARKET_SQL = text("""
    UPDATE markets
    SET settled = :settled,
        winning_outcome = :winning_outcome,
        final_price = :final_price,
        total_shares = :total_shares,
        total_volume = :total_volume,
        updated_at = NOW()
    WHERE id = :id
""")

_LIST_MARKETS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM markets
    WHERE
        (CAST(:settled AS BOOLEAN) IS NULL OR settled = CAST(:settled AS BOOLEAN))
        AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < CAST(:cursor_id AS BIGINT))
    ORDER BY id DESC
    LIMIT :limit
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_market(row: object) -> Market:
    winning = row.winning_outcome  # type: ignore[attr-defined]
    final_price = row.final_price  # type: ignore[attr-defined]
    return Market(
        id=int(row.id),  # type: ignore[attr-defined]
        creator=row.creator,  # type: ignore[attr-defined]
        token_address=row.token_address,  # type: ignore[attr-defined]
        initial_price=int(row.initial_price),  # type: ignore[attr-defined]
        created_at=int(row.created_at),  # type: ignore[attr-defined]
        settlement_time=int(row.settlement_time),  # type: ignore[attr-defined]
        settled=row.settled,  # type: ignore[attr-defined]
        winning_outcome=Outcome(winning) if winning is not None else None,
        final_price=int(final_price) if final_price is not None else None,
        total_shares=[int(v) for v in row.total_shares],  # type: ignore[attr-defined]
        total_volume=[int(v) for v in row.total_volume],  # type: ignore[attr-defined]
        position_tokens=list(row.position_tokens),  # type: ignore[attr-defined]
    )


def _market_params(market: Market) -> dict[str, object]:
    return {
        "id": market.id,
        "creator": market.creator,
        "token_address": market.token_address,
        "initial_price": Decimal(market.initial_price),
        "created_at": market.created_at,
        "settlement_time": market.settlement_time,
        "settled": market.settled,
        "winning_outcome": market.winning_outcome.value if market.winning_outcome else None,
        "final_price": Decimal(market.final_price) if market.final_price is not None else None,
        "total_shares": [Decimal(v) for v in market.total_shares],
        "total_volume": [Decimal(v) for v in market.total_volume],
        "position_tokens": market.position_tokens,
    }


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class MarketRepository:
    async def allocate_market_id(self, db: AsyncSession) -> int:
        result = await db.execute(_NEXT_ID_SQL)
        return int(result.scalar_one())

    async def get_market(
        self, db: AsyncSession, market_id: int, for_update: bool = False
    ) -> Market | None:
        sql = _GET_MARKET_FOR_UPDATE_SQL if for_update else _GET_MARKET_SQL
        result = await db.execute(sql, {"market_id": market_id})
        row = result.fetchone()
        return _row_to_market(row) if row else None

    async def insert_market(self, db: AsyncSession, market: Market) -> None:
        await db.execute(_INSERT_MARKET_SQL, _market_params(market))

    async def update_market(self, db: AsyncSession, market: Market) -> None:
        params = _market_params(market)
        await db.execute(
            _UPDATE_MARKET_SQL,
            {
                "id": params["id"],
                "settled": params["settled"],
                "winning_outcome": params["winning_outcome"],
                "final_price": params["final_price"],
                "total_shares": params["total_shares"],
                "total_volume": params["total_volume"],
            },
        )

    async def list_markets(
        self,
        db: AsyncSession,
        settled: bool | None,
        cursor_id: int | None,
        limit: int,
    ) -> list[Market]:
        result = await db.execute(
            _LIST_MARKETS_SQL,
            {"settled": settled, "cursor_id": cursor_id, "limit": limit},
        )
        return [_row_to_market(row) for row in result.fetchall()]
