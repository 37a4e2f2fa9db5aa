import json
from decimal import Decimal

import httpx
import pytest
import respx

from base_analyzer.analysis.network import collect_block_metrics, explorer_url, network_status
from base_analyzer.config import settings
from base_analyzer.errors import BlockNotFound
from tests.conftest import MOCK_FULL_BLOCK, MOCK_RPC_ERROR, NETWORK_RESPONSES, TX_HASH, USDC, rpc_responder


class TestExplorerUrl:
    def test_tx(self):
        assert explorer_url(TX_HASH, "tx") == f"{settings.explorer_url}/tx/{TX_HASH}"

    def test_token(self):
        assert explorer_url(USDC, "token") == f"{settings.explorer_url}/token/{USDC}"

    def test_defaults_to_address(self):
        assert explorer_url(USDC) == f"{settings.explorer_url}/address/{USDC}"
        assert explorer_url(USDC, "contract") == f"{settings.explorer_url}/address/{USDC}"


class TestNetworkStatus:
    @respx.mock
    async def test_healthy(self):
        respx.post(settings.base_rpc_url).side_effect = rpc_responder(NETWORK_RESPONSES)
        with pytest.MonkeyPatch.context() as mp:
            mp.setattr(settings, "network", "mainnet")
            status = await network_status()

        assert status.is_healthy
        assert status.chain_id == 8453
        assert status.expected_chain_id == 8453
        assert status.block_number == 20_000_000
        assert status.gas_price_gwei == "0.1"
        assert status.error is None

    @respx.mock
    async def test_wrong_chain_is_unhealthy(self):
        respx.post(settings.base_rpc_url).side_effect = rpc_responder(
            {**NETWORK_RESPONSES, "eth_chainId": {"jsonrpc": "2.0", "id": 6, "result": "0x1"}}
        )
        with pytest.MonkeyPatch.context() as mp:
            mp.setattr(settings, "network", "mainnet")
            status = await network_status()

        assert not status.is_healthy
        assert status.chain_id == 1
        assert "does not match" in status.error

    @respx.mock
    async def test_rpc_failure_is_unhealthy(self):
        respx.post(settings.base_rpc_url).mock(return_value=httpx.Response(200, json=MOCK_RPC_ERROR))

        status = await network_status()
        assert not status.is_healthy
        assert status.block_number is None
        assert "rate limit" in status.error


class TestBlockMetrics:
    @respx.mock
    async def test_collect(self):
        route = respx.post(settings.base_rpc_url)
        route.mock(return_value=httpx.Response(200, json=MOCK_FULL_BLOCK))

        metrics = await collect_block_metrics(16)

        assert metrics.transaction_count == 2
        assert metrics.unique_addresses == 3
        assert metrics.average_gas_price == 1_500_000_000
        assert metrics.total_value == Decimal("1.5")
        assert metrics.gas_used == 42000
        # full transaction objects requested
        assert json.loads(route.calls.last.request.content)["params"] == ["0x10", True]

    @respx.mock
    async def test_missing_block(self):
        respx.post(settings.base_rpc_url).mock(
            return_value=httpx.Response(200, json={"jsonrpc": "2.0", "id": 3, "result": None})
        )

        with pytest.raises(BlockNotFound):
            await collect_block_metrics(10**12)
