"""AuthorizationService — owner checks and the settlement-bot allow-list."""

import logging
from typing import Any

from src.pm_common.errors import NotAuthorizedError, NotOwnerError
from src.pm_engine.domain.events import BotAuthorized, DomainEvent
from src.pm_engine.engine.context import EngineContext

logger = logging.getLogger(__name__)


class AuthorizationService:
    def __init__(self, ctx: EngineContext) -> None:
        self._ctx = ctx

    def is_owner(self, account: str) -> bool:
        return account == self._ctx.params.owner

    def require_owner(self, caller: str) -> None:
        if not self.is_owner(caller):
            raise NotOwnerError(caller)

    async def is_authorized_bot(self, db: Any, account: str) -> bool:
        return await self._ctx.bots.is_authorized(db, account)

    async def require_settler(self, db: Any, caller: str) -> None:
        """Owner or an allow-listed bot may settle."""
        if self.is_owner(caller):
            return
        if not await self._ctx.bots.is_authorized(db, caller):
            raise NotAuthorizedError(caller)

    async def authorize_bot(
        self, db: Any, caller: str, account: str, flag: bool
    ) -> list[DomainEvent]:
        self.require_owner(caller)
        await self._ctx.bots.set_authorized(db, account, flag)
        logger.info("Bot %s authorized=%s by %s", account, flag, caller)
        return [BotAuthorized(account=account, authorized=flag)]

    async def list_bots(self, db: Any) -> list[str]:
        return await self._ctx.bots.list_authorized(db)
