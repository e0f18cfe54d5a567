import dataclasses

from eth_typing import BlockNumber, ChecksumAddress
from web3 import AsyncWeb3, Web3
from web3.types import TxParams, TxReceipt, Wei

from src.common.contracts import (
    ERC20Contract,
    StakingContract,
    StakingProxyContract,
    VaultContract,
)
from src.common.execution import ChainClock
from src.config import settings
from src.epochs import clock
from src.epochs import service as epochs_service
from src.epochs.typings import EndOfEpochInfo
from src.pools import service as pools_service
from src.pools.typings import DEFAULT_PARAMS, PoolId, StakingParams


class StakingApiWrapper:
    """
    Entry point for epoch lifecycle and pool management of a deployed staking system.
    Contract handles are set once on construction.
    """

    def __init__(
        self,
        chain_clock: ChainClock,
        owner_address: ChecksumAddress,
        staking_proxy_contract: StakingProxyContract,
        staking_contract: StakingContract,
        staking_contract_address: ChecksumAddress,
        zrx_vault_contract: VaultContract,
        eth_vault_contract: VaultContract,
        reward_vault_contract: VaultContract,
        zrx_token_contract: ERC20Contract,
        default_params: StakingParams = DEFAULT_PARAMS,
    ) -> None:
        self.chain_clock = chain_clock
        self.owner_address = owner_address
        # The address of the staking logic contract
        self.staking_contract_address = staking_contract_address
        # Staking logic ABI bound to the staking proxy address
        self.staking_contract = staking_contract
        self.staking_proxy_contract = staking_proxy_contract
        self.zrx_vault_contract = zrx_vault_contract
        self.eth_vault_contract = eth_vault_contract
        self.reward_vault_contract = reward_vault_contract
        self.zrx_token_contract = zrx_token_contract
        self.default_params = default_params
        self.finalization_state = epochs_service.FinalizationState()

    # Epoch utils
    async def fast_forward_to_next_epoch(self) -> int:
        return await clock.fast_forward_to_next_epoch(self.chain_clock, self.staking_contract)

    async def skip_to_next_epoch_and_finalize(self) -> TxReceipt:
        return await epochs_service.skip_to_next_epoch_and_finalize(
            self.chain_clock, self.staking_contract
        )

    async def end_epoch(self) -> EndOfEpochInfo:
        return await epochs_service.end_epoch(self.staking_contract)

    async def find_active_pool_ids(self, epoch: int | None = None) -> list[PoolId]:
        return await epochs_service.find_active_pool_ids(self.staking_contract, epoch)

    async def process_epoch(self) -> TxReceipt | None:
        return await epochs_service.process_epoch(
            self.chain_clock, self.staking_contract, self.finalization_state
        )

    async def get_current_epoch(self) -> int:
        return await self.staking_contract.get_current_epoch()

    # Other utils
    async def create_staking_pool(
        self,
        operator_address: ChecksumAddress,
        operator_share: int,
        add_operator_as_maker: bool,
    ) -> PoolId:
        return await pools_service.create_staking_pool(
            self.staking_contract,
            operator_address=operator_address,
            operator_share=operator_share,
            add_operator_as_maker=add_operator_as_maker,
        )

    async def get_zrx_vault_balance(self) -> Wei:
        return await pools_service.get_zrx_vault_balance(
            self.zrx_token_contract, self.zrx_vault_contract.address
        )

    async def set_params(self, **params: int | str) -> TxReceipt:
        return await pools_service.set_params(
            self.staking_contract, self.default_params, **params
        )

    async def get_params(self) -> StakingParams:
        return await pools_service.get_params(self.staking_contract)


def get_tx_defaults(owner_address: ChecksumAddress) -> TxParams:
    tx_defaults: TxParams = {
        'from': owner_address,
        'gas': settings.TX_GAS_LIMIT,
    }
    if settings.TX_GAS_PRICE_WEI:
        tx_defaults['gasPrice'] = Wei(int(settings.TX_GAS_PRICE_WEI))
    return tx_defaults


def build_default_params() -> StakingParams:
    return dataclasses.replace(
        DEFAULT_PARAMS,
        weth_proxy_address=settings.WETH_PROXY_ADDRESS,
        eth_vault_address=settings.ETH_VAULT_CONTRACT_ADDRESS,
        reward_vault_address=settings.REWARD_VAULT_CONTRACT_ADDRESS,
        zrx_vault_address=settings.ZRX_VAULT_CONTRACT_ADDRESS,
    )


def build_staking_api(client: AsyncWeb3, owner_address: ChecksumAddress) -> StakingApiWrapper:
    """Builds contract handles of the deployed staking system from settings."""
    tx_defaults = get_tx_defaults(owner_address)
    # disguise the staking proxy as a staking contract
    staking_contract = StakingContract(
        address=settings.STAKING_PROXY_CONTRACT_ADDRESS,
        client=client,
        tx_defaults=tx_defaults,
        genesis_block=BlockNumber(settings.STAKING_GENESIS_BLOCK),
    )
    return StakingApiWrapper(
        chain_clock=ChainClock(client),
        owner_address=Web3.to_checksum_address(owner_address),
        staking_proxy_contract=StakingProxyContract(
            settings.STAKING_PROXY_CONTRACT_ADDRESS, client, tx_defaults
        ),
        staking_contract=staking_contract,
        staking_contract_address=settings.STAKING_CONTRACT_ADDRESS,
        zrx_vault_contract=VaultContract(settings.ZRX_VAULT_CONTRACT_ADDRESS, client, tx_defaults),
        eth_vault_contract=VaultContract(settings.ETH_VAULT_CONTRACT_ADDRESS, client, tx_defaults),
        reward_vault_contract=VaultContract(
            settings.REWARD_VAULT_CONTRACT_ADDRESS, client, tx_defaults
        ),
        zrx_token_contract=ERC20Contract(settings.ZRX_TOKEN_CONTRACT_ADDRESS, client, tx_defaults),
        default_params=build_default_params(),
    )
