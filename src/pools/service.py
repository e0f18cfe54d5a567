import dataclasses
import logging

from eth_typing import ChecksumAddress
from web3 import Web3
from web3.types import TxReceipt, Wei

from src.common.contracts import ERC20Contract, StakingContract
from src.common.exceptions import ProtocolInvariantError
from src.pools.typings import PoolId, StakingParams

logger = logging.getLogger(__name__)


async def create_staking_pool(
    staking_contract: StakingContract,
    operator_address: ChecksumAddress,
    operator_share: int,
    add_operator_as_maker: bool,
) -> PoolId:
    """
    Creates staking pool operated by `operator_address`.
    `operator_share` is expressed in parts per million.
    """
    receipt = await staking_contract.create_staking_pool(
        operator_share=operator_share,
        add_operator_as_maker=add_operator_as_maker,
        operator_address=operator_address,
    )
    events = staking_contract.get_staking_pool_created_events(receipt)
    if len(events) != 1:
        raise ProtocolInvariantError(
            f'Expected single StakingPoolCreated event, got {len(events)}. '
            f'Tx hash: {Web3.to_hex(receipt["transactionHash"])}'
        )

    pool_id = PoolId(Web3.to_hex(events[0]['args']['poolId']))
    logger.info(
        'Created staking pool %s: operator=%s, operator share=%d',
        pool_id,
        operator_address,
        operator_share,
    )
    return pool_id


async def set_params(
    staking_contract: StakingContract, default_params: StakingParams, **params: int | str
) -> TxReceipt:
    # fields that are not given are taken from defaults
    staking_params = dataclasses.replace(default_params, **params)
    logger.info('Setting staking params: %s', staking_params)
    return await staking_contract.set_params(staking_params)


async def get_params(staking_contract: StakingContract) -> StakingParams:
    return await staking_contract.get_params()


async def get_zrx_vault_balance(
    zrx_token_contract: ERC20Contract, zrx_vault_address: ChecksumAddress
) -> Wei:
    return await zrx_token_contract.balance_of(zrx_vault_address)
