from __future__ import annotations

import asyncio
from typing import Any

import backoff
import requests
from substrateinterface import SubstrateInterface
from substrateinterface.exceptions import SubstrateRequestException

from ...constants import ASSETS_PALLET, VORTEX_PALLET
from ...domain import AssetBalance, DistributionState
from ...logger import get_logger
from ...settings import VortexSettings
from ...units import to_asset_id, to_decimal
from .base import BaseChainStateAdapter

logger = get_logger(__name__)

RETRYABLE_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
    ConnectionError,
)


class RootNetworkChainAdapter(BaseChainStateAdapter):
    """Reads Vortex distribution storage from a Root Network node.

    Storage items are queried concurrently, each in a worker thread, at most
    ``rpc_max_concurrent_calls`` at a time.
    """

    def __init__(self, config: VortexSettings):
        super().__init__(config)
        self.rpc_url = config.rpc_url_resolved
        self._semaphore = asyncio.Semaphore(config.rpc_max_concurrent_calls)

    @property
    def adapter_name(self) -> str:
        return "root_network"

    def _connect(self) -> tuple[SubstrateInterface, str]:
        """Connect and pin the current chain head.

        Every storage read of a calculation uses the returned block hash, so
        all values describe the same block.
        """
        substrate = SubstrateInterface(url=self.rpc_url)
        try:
            block_hash = substrate.get_chain_head()
            # Queries at this hash reuse the loaded runtime instead of reloading it.
            substrate.init_runtime(block_hash=block_hash)
        except Exception:
            substrate.close()
            raise
        return substrate, block_hash

    async def _query(
        self,
        substrate: SubstrateInterface,
        block_hash: str,
        module: str,
        storage_function: str,
        params: list[Any],
    ) -> Any:
        def _on_backoff(details: Any) -> None:
            logger.warning(
                "Query %s.%s failed (attempt %d of %d): %s",
                module,
                storage_function,
                details["tries"],
                self.config.adapter_retries + 1,
                details.get("exception"),
            )

        @backoff.on_exception(
            backoff.expo,
            RETRYABLE_ERRORS,
            max_tries=self.config.adapter_retries + 1,
            jitter=backoff.full_jitter,
            on_backoff=_on_backoff,
        )
        async def _query_with_retry() -> Any:
            async with self._semaphore:
                return await asyncio.to_thread(
                    substrate.query,
                    module,
                    storage_function,
                    params,
                    block_hash=block_hash,
                )

        result = await _query_with_retry()
        value = result.value if result is not None else None
        logger.debug("%s.%s(%s) = %s", module, storage_function, params, value)
        return value

    @staticmethod
    def _parse_asset_list(raw: Any, name: str) -> tuple[AssetBalance, ...]:
        """Parse a ``Vec<(AssetId, Balance)>`` storage value."""
        if raw is None:
            return ()
        if not isinstance(raw, (list, tuple)):
            raise ValueError(f"{name}: expected a list of (assetId, balance), got {raw!r}")

        balances: list[AssetBalance] = []
        for entry in raw:
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise ValueError(f"{name}: malformed entry {entry!r}")
            asset_id, balance = entry
            balances.append(
                AssetBalance(
                    asset_id=to_asset_id(asset_id, field=f"{name} assetId"),
                    balance=to_decimal(balance, field=f"{name} balance"),
                )
            )
        return tuple(balances)

    async def fetch_distribution_state(
        self, distribution_id: int, account_id: str
    ) -> DistributionState:
        """Fetch all Vortex distribution data for a cycle and account.

        Raises:
            LookupError: If the cycle or the VTX asset does not exist on chain
            SubstrateRequestException: If the node rejects a query
        """
        logger.info(
            "Fetching distribution %d state for %s from %s",
            distribution_id,
            account_id,
            self.rpc_url,
        )
        substrate, block_hash = await asyncio.to_thread(self._connect)
        logger.debug("Reading distribution %d at block %s", distribution_id, block_hash)

        queries = [
            (VORTEX_PALLET, "FeePotAssetsList", [distribution_id]),
            (VORTEX_PALLET, "VtxVaultAssetsList", [distribution_id]),
            (VORTEX_PALLET, "TotalNetworkReward", [distribution_id]),
            (VORTEX_PALLET, "TotalBootstrapReward", [distribution_id]),
            (VORTEX_PALLET, "TotalVortex", [distribution_id]),
            (ASSETS_PALLET, "Asset", [self.config.vtx_asset_id]),
            (VORTEX_PALLET, "TotalWorkPoints", [distribution_id]),
            (VORTEX_PALLET, "TotalRewardPoints", [distribution_id]),
            (VORTEX_PALLET, "WorkPoints", [distribution_id, account_id]),
            (VORTEX_PALLET, "RewardPoints", [distribution_id, account_id]),
        ]
        try:
            results = await asyncio.gather(
                *(
                    self._query(substrate, block_hash, module, storage_function, params)
                    for module, storage_function, params in queries
                ),
                return_exceptions=True,
            )
        finally:
            # Every query has settled, no worker thread still uses the connection.
            await asyncio.to_thread(substrate.close)

        for result in results:
            if isinstance(result, SubstrateRequestException):
                logger.error("Root Network query failed: %s", result)
            if isinstance(result, BaseException):
                raise result

        (
            fee_pot_assets,
            vault_assets,
            total_network_reward,
            total_bootstrap_reward,
            total_vortex,
            vtx_asset,
            total_work_points,
            total_reward_points,
            account_work_points,
            account_reward_points,
        ) = results

        if not isinstance(vtx_asset, dict) or "supply" not in vtx_asset:
            raise LookupError(
                f"VTX asset {self.config.vtx_asset_id} not found on {self.rpc_url}"
            )
        if total_work_points is None or total_reward_points is None:
            raise LookupError(f"Vortex distribution {distribution_id} not found")

        state = DistributionState(
            fee_pot_asset_balances=self._parse_asset_list(
                fee_pot_assets, "FeePotAssetsList"
            ),
            vault_asset_balances=self._parse_asset_list(
                vault_assets, "VtxVaultAssetsList"
            ),
            current_supply=to_decimal(vtx_asset["supply"], field="VTX supply"),
            total_work_points=to_decimal(total_work_points, field="TotalWorkPoints"),
            # An account without points for the cycle has no entry.
            account_work_points=to_decimal(
                account_work_points or 0, field="WorkPoints"
            ),
            total_staker_points=to_decimal(
                total_reward_points, field="TotalRewardPoints"
            ),
            account_staker_points=to_decimal(
                account_reward_points or 0, field="RewardPoints"
            ),
            total_network_reward=to_decimal(
                total_network_reward or 0, field="TotalNetworkReward"
            ),
            total_bootstrap_reward=to_decimal(
                total_bootstrap_reward or 0, field="TotalBootstrapReward"
            ),
            total_vortex=to_decimal(total_vortex or 0, field="TotalVortex"),
        )

        logger.info(
            "Distribution %d: %d fee pot asset(s), %d vault asset(s), VTX supply %s",
            distribution_id,
            len(state.fee_pot_asset_balances),
            len(state.vault_asset_balances),
            state.current_supply,
        )
        return state
