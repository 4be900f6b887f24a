# tests/integration/test_market_flow.py
"""Integration tests for market creation, trading and the reward ledger.

Requires a running PostgreSQL + migrations (alembic upgrade head), STORAGE_BACKEND=postgres.
Deselected by default; run with: pytest -m integration
Markets created here settle at the next UTC midnight, so settlement itself is
covered by the unit suite; here only the not-yet-settleable paths are hit.
"""

import pytest

pytestmark = [pytest.mark.integration, pytest.mark.asyncio(loop_scope="session")]

WAD = 10**18
FEE = WAD // 100


async def _create(client, headers) -> dict:
    resp = await client.post(
        "/api/v1/markets",
        json={"token_address": "0xINTEGRATION", "initial_price": 2000 * WAD, "payment": FEE},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


class TestMarketLifecycle:
    async def test_create_and_read_back(self, client, trader):
        created = await _create(client, trader)
        resp = await client.get(f"/api/v1/markets/{created['id']}")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["creator"] == trader["X-Account-Id"]
        assert data["initial_price"] == 2000 * WAD
        assert data["settled"] is False

    async def test_creator_receives_reward(self, client, trader):
        await _create(client, trader)
        resp = await client.get(f"/api/v1/rewards/balances/{trader['X-Account-Id']}")
        assert resp.json()["data"]["balance"] >= 100 * WAD

    async def test_buy_sell_updates_pool(self, client, trader):
        market = await _create(client, trader)
        resp = await client.post(
            f"/api/v1/markets/{market['id']}/buy",
            json={"outcome": "PUMP", "shares": 100, "payment": 5 * WAD},
            headers=trader,
        )
        assert resp.status_code == 200, resp.text
        net = resp.json()["data"]["net"]

        resp = await client.get(f"/api/v1/markets/{market['id']}")
        data = resp.json()["data"]
        assert data["total_shares"]["PUMP"] == 100
        assert data["total_volume"]["PUMP"] == net
        token = data["position_tokens"]["PUMP"]

        resp = await client.get(f"/api/v1/ledger/{token}/balances/{trader['X-Account-Id']}")
        assert resp.json()["data"]["balance"] == 100

        resp = await client.post(
            f"/api/v1/markets/{market['id']}/sell",
            json={"outcome": "PUMP", "shares": 40},
            headers=trader,
        )
        assert resp.status_code == 200, resp.text
        resp = await client.get(f"/api/v1/markets/{market['id']}")
        assert resp.json()["data"]["total_shares"]["PUMP"] == 60

    async def test_settle_before_time_rejected(self, client, owner_headers, trader):
        market = await _create(client, trader)
        resp = await client.post(
            f"/api/v1/settlement/markets/{market['id']}",
            json={"final_price": 2500 * WAD},
            headers=owner_headers,
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 3004

    async def test_unsettled_excludes_fresh_markets(self, client, trader):
        market = await _create(client, trader)
        resp = await client.post(
            "/api/v1/settlement/unsettled", json={"market_ids": [market["id"]]}
        )
        assert resp.json()["data"]["market_ids"] == []

    async def test_buy_without_funds_rolls_back(self, client, trader):
        market = await _create(client, trader)
        resp = await client.post(
            f"/api/v1/markets/{market['id']}/buy",
            json={"outcome": "MOON", "shares": 10, "payment": 10**6 * WAD},
            headers=trader,
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 5001
        resp = await client.get(f"/api/v1/markets/{market['id']}")
        assert resp.json()["data"]["total_shares"]["MOON"] == 0


class TestListMarkets:
    async def test_cursor_pagination(self, client, trader):
        await _create(client, trader)
        await _create(client, trader)
        resp1 = await client.get("/api/v1/markets?limit=1")
        page1 = resp1.json()["data"]
        assert page1["has_more"] is True
        resp2 = await client.get(f"/api/v1/markets?limit=1&cursor={page1['next_cursor']}")
        page2 = resp2.json()["data"]
        assert page2["items"][0]["id"] < page1["items"][0]["id"]

    async def test_settled_filter(self, client):
        resp = await client.get("/api/v1/markets?settled=false&limit=100")
        assert all(i["settled"] is False for i in resp.json()["data"]["items"])


class TestAdmin:
    async def test_bot_roundtrip(self, client, owner_headers, trader):
        bot = f"{trader['X-Account-Id']}_bot"
        resp = await client.post(
            "/api/v1/admin/bots", json={"account": bot, "authorized": True}, headers=owner_headers
        )
        assert resp.status_code == 200
        resp = await client.get(f"/api/v1/admin/bots/{bot}")
        assert resp.json()["data"]["authorized"] is True

    async def test_invariants_hold(self, client, owner_headers):
        resp = await client.get("/api/v1/admin/invariants", headers=owner_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["violations"] == []
