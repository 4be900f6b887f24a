from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

_IS_AUTHORIZED_SQL = text(
    "SELECT authorized FROM authorized_bots WHERE account = :account"
)

_UPSERT_SQL = text("""
    INSERT INTO authorized_bots (account, authorized)
    VALUES (:account, :authorized)
    ON CONFLICT (account) DO UPDATE
    SET authorized = :authorized, updated_at = NOW()
""")

_LIST_SQL = text(
    "SELECT account FROM authorized_bots WHERE authorized ORDER BY account"
)


class BotRegistryRepository:
    async def is_authorized(self, db: AsyncSession, account: str) -> bool:
        result = await db.execute(_IS_AUTHORIZED_SQL, {"account": account})
        return bool(result.scalar_one_or_none())

    async def set_authorized(self, db: AsyncSession, account: str, flag: bool) -> None:
        await db.execute(_UPSERT_SQL, {"account": account, "authorized": flag})

    async def list_authorized(self, db: AsyncSession) -> list[str]:
        result = await db.execute(_LIST_SQL)
        return [row.account for row in result.fetchall()]
