import json
import logging
import os
from typing import Dict, Sequence

from eth_typing import BlockNumber, ChecksumAddress
from web3 import AsyncWeb3, Web3
from web3.contract.async_contract import AsyncContractFunction, AsyncContractFunctions
from web3.logs import DISCARD
from web3.types import EventData, TxParams, TxReceipt, Wei

from src.common.exceptions import TransactionFailedError
from src.common.execution import wait_for_tx_receipt
from src.config.settings import EVENTS_BLOCKS_RANGE
from src.pools.typings import PoolId, StakingParams

logger = logging.getLogger(__name__)


def _load_abi(abi_path: str) -> Dict:
    current_dir = os.path.dirname(__file__)
    with open(os.path.join(current_dir, abi_path)) as f:
        return json.load(f)


class ContractWrapper:
    abi_path: str

    def __init__(
        self,
        address: ChecksumAddress,
        client: AsyncWeb3,
        tx_defaults: TxParams | None = None,
    ) -> None:
        self.address = address
        self.client = client
        self.tx_defaults: TxParams = tx_defaults or {}
        self.contract = client.eth.contract(address=address, abi=_load_abi(self.abi_path))

    @property
    def functions(self) -> AsyncContractFunctions:
        return self.contract.functions

    async def _transact(
        self, tx_function: AsyncContractFunction, tx_params: TxParams | None = None
    ) -> TxReceipt:
        """Sends transaction and blocks until it is mined."""
        tx_params = self.tx_defaults | (tx_params or {})
        tx_hash = await tx_function.transact(tx_params)
        logger.debug('%s transaction sent: %s', tx_function.fn_name, Web3.to_hex(tx_hash))

        receipt = await wait_for_tx_receipt(self.client, tx_hash)
        if not receipt['status']:
            raise TransactionFailedError(tx_function.fn_name, tx_hash)
        return receipt

    async def _get_events(
        self,
        event_name: str,
        from_block: BlockNumber,
        to_block: BlockNumber,
        argument_filters: dict | None = None,
    ) -> list[EventData]:
        """Fetches events in ascending block ranges, keeping emission order."""
        event_cls = getattr(self.contract.events, event_name)
        events: list[EventData] = []
        while from_block <= to_block:
            chunk_to_block = BlockNumber(min(from_block + EVENTS_BLOCKS_RANGE - 1, to_block))
            events.extend(
                await event_cls().get_logs(
                    argument_filters=argument_filters,
                    from_block=from_block,
                    to_block=chunk_to_block,
                )
            )
            from_block = BlockNumber(chunk_to_block + 1)
        return events

    def _process_receipt(self, event_name: str, receipt: TxReceipt) -> list[EventData]:
        """Decodes receipt logs of the given event kind, skipping other logs."""
        event_cls = getattr(self.contract.events, event_name)
        return list(event_cls().process_receipt(receipt, errors=DISCARD))


class StakingContract(ContractWrapper):
    """
    Staking logic ABI. Bound to the staking proxy address for all calls.
    """

    abi_path = 'abi/IStaking.json'

    def __init__(
        self,
        address: ChecksumAddress,
        client: AsyncWeb3,
        tx_defaults: TxParams | None = None,
        genesis_block: BlockNumber = BlockNumber(0),
    ) -> None:
        super().__init__(address, client, tx_defaults)
        self.genesis_block = genesis_block

    async def get_current_epoch(self) -> int:
        return await self.contract.functions.getCurrentEpoch().call()

    async def get_current_epoch_earliest_end_time(self) -> int:
        return await self.contract.functions.getCurrentEpochEarliestEndTimeInSeconds().call()

    async def end_epoch(self) -> TxReceipt:
        return await self._transact(self.contract.functions.endEpoch())

    async def finalize_pools(self, pool_ids: Sequence[PoolId]) -> TxReceipt:
        return await self._transact(self.contract.functions.finalizePools(list(pool_ids)))

    async def create_staking_pool(
        self,
        operator_share: int,
        add_operator_as_maker: bool,
        operator_address: ChecksumAddress,
    ) -> TxReceipt:
        tx_function = self.contract.functions.createStakingPool(
            operator_share, add_operator_as_maker
        )
        return await self._transact(tx_function, {'from': operator_address})

    async def set_params(self, params: StakingParams) -> TxReceipt:
        return await self._transact(self.contract.functions.setParams(*params.to_tuple()))

    async def get_params(self) -> StakingParams:
        return StakingParams.from_tuple(await self.contract.functions.getParams().call())

    async def get_staking_pool_activated_events(self, epoch: int) -> list[EventData]:
        to_block = await self.client.eth.get_block_number()
        return await self._get_events(
            event_name='StakingPoolActivated',
            from_block=self.genesis_block,
            to_block=to_block,
            argument_filters={'epoch': epoch},
        )

    def get_epoch_ended_events(self, receipt: TxReceipt) -> list[EventData]:
        return self._process_receipt('EpochEnded', receipt)

    def get_staking_pool_created_events(self, receipt: TxReceipt) -> list[EventData]:
        return self._process_receipt('StakingPoolCreated', receipt)


class StakingProxyContract(ContractWrapper):
    abi_path = 'abi/IStakingProxy.json'

    async def staking_contract(self) -> ChecksumAddress:
        address = await self.contract.functions.stakingContract().call()
        return Web3.to_checksum_address(address)


class VaultContract(ContractWrapper):
    """ZRX vault, ETH vault and staking pool reward vault share the same core."""

    abi_path = 'abi/IVaultCore.json'

    async def staking_proxy_address(self) -> ChecksumAddress:
        address = await self.contract.functions.stakingProxyAddress().call()
        return Web3.to_checksum_address(address)


class ERC20Contract(ContractWrapper):
    abi_path = 'abi/IERC20.json'

    async def balance_of(self, address: ChecksumAddress) -> Wei:
        return Wei(await self.contract.functions.balanceOf(address).call())
