"""Unit tests for the bot registry, reward pool and event sink SQL adapters."""
import json
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pm_auth.infrastructure.persistence import BotRegistryRepository
from src.pm_common.enums import Outcome
from src.pm_common.errors import InternalError
from src.pm_engine.domain.events import BatchSettlement, BotAuthorized, MarketSettled
from src.pm_engine.infrastructure.events import SqlEventSink
from src.pm_rewards.domain.models import RewardPool
from src.pm_rewards.infrastructure.persistence import RewardPoolRepository


class TestBotRegistryRepository:
    @pytest.mark.asyncio
    async def test_is_authorized_handles_missing_row(self) -> None:
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        db = MagicMock()
        db.execute = AsyncMock(return_value=result)
        assert await BotRegistryRepository().is_authorized(db, "bot") is False

    @pytest.mark.asyncio
    async def test_set_authorized_upserts(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock()
        await BotRegistryRepository().set_authorized(db, "bot", True)
        sql, params = db.execute.call_args[0]
        assert "ON CONFLICT" in str(sql)
        assert params == {"account": "bot", "authorized": True}

    @pytest.mark.asyncio
    async def test_list_authorized(self) -> None:
        rows = [MagicMock(account="a"), MagicMock(account="b")]
        result = MagicMock()
        result.fetchall.return_value = rows
        db = MagicMock()
        db.execute = AsyncMock(return_value=result)
        assert await BotRegistryRepository().list_authorized(db) == ["a", "b"]


class TestRewardPoolRepository:
    @pytest.mark.asyncio
    async def test_get_pool_maps_row(self) -> None:
        row = MagicMock(
            total_shares_issued=Decimal(10**20),
            protocol_token_balance=Decimal(1000),
            protocol_token="PROTO",
        )
        result = MagicMock()
        result.fetchone.return_value = row
        db = MagicMock()
        db.execute = AsyncMock(return_value=result)

        pool = await RewardPoolRepository().get_pool(db, for_update=True)

        assert pool == RewardPool(
            total_shares_issued=10**20, protocol_token_balance=1000, protocol_token="PROTO"
        )
        assert "FOR UPDATE" in str(db.execute.call_args[0][0])

    @pytest.mark.asyncio
    async def test_missing_row_is_internal_error(self) -> None:
        result = MagicMock()
        result.fetchone.return_value = None
        db = MagicMock()
        db.execute = AsyncMock(return_value=result)
        with pytest.raises(InternalError):
            await RewardPoolRepository().get_pool(db)

    @pytest.mark.asyncio
    async def test_save_pool_binds_decimals(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock()
        await RewardPoolRepository().save_pool(db, RewardPool(5, 6, None))
        params = db.execute.call_args[0][1]
        assert params["total_shares_issued"] == Decimal(5)
        assert params["protocol_token_balance"] == Decimal(6)
        assert params["protocol_token"] is None


class TestSqlEventSink:
    @pytest.mark.asyncio
    async def test_market_event_row(self) -> None:
        db = AsyncMock()
        event = MarketSettled(market_id=3, outcome=Outcome.RUG, final_price=10**18)

        await SqlEventSink().emit(db, event)

        params = db.execute.await_args[0][1]
        assert params["market_id"] == 3
        assert params["event_type"] == "MARKET_SETTLED"
        assert json.loads(params["payload"]) == {
            "market_id": 3,
            "outcome": "RUG",
            "final_price": 10**18,
        }

    @pytest.mark.asyncio
    async def test_registry_event_has_no_market(self) -> None:
        db = AsyncMock()
        await SqlEventSink().emit(db, BotAuthorized(account="bot", authorized=True))
        assert db.execute.await_args[0][1]["market_id"] is None

    def test_batch_payload_lists_ids(self) -> None:
        event = BatchSettlement(market_ids=(1, 2, 3), success_count=2)
        assert event.to_dict() == {
            "event_type": "BATCH_SETTLEMENT",
            "market_ids": [1, 2, 3],
            "success_count": 2,
        }
