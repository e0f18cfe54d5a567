import asyncio
import logging

from web3 import AsyncWeb3

from src.api import StakingApiWrapper
from src.common.execution import check_owner_balance
from src.config.settings import EXECUTION_ENDPOINT

logger = logging.getLogger(__name__)


async def startup_checks(client: AsyncWeb3, api: StakingApiWrapper) -> None:
    logger.info('Checking owner account %s...', api.owner_address)
    await check_owner_balance(client, api.owner_address)

    await _check_execution_node(client)

    logger.info('Checking staking proxy %s...', api.staking_proxy_contract.address)
    await check_staking_proxy(api)


async def _check_execution_node(client: AsyncWeb3) -> None:
    while True:
        try:
            syncing = await client.eth.syncing
            if syncing:
                logger.warning(
                    'The execution node located at %s has not completed synchronization yet.',
                    EXECUTION_ENDPOINT,
                )
            else:
                block_number = await client.eth.block_number
                logger.info(
                    'Connected to execution node at %s. Current block number: %s',
                    EXECUTION_ENDPOINT,
                    block_number,
                )
                return
        except Exception as e:
            logger.warning(
                'Failed to connect to execution node at %s. %s',
                EXECUTION_ENDPOINT,
                e,
            )
        logger.warning('Execution node is not ready. Retrying in 10 seconds...')
        await asyncio.sleep(10)


async def check_staking_proxy(api: StakingApiWrapper) -> None:
    staking_contract_address = await api.staking_proxy_contract.staking_contract()
    if staking_contract_address != api.staking_contract_address:
        raise RuntimeError(
            f'Staking proxy {api.staking_proxy_contract.address} points to '
            f'{staking_contract_address}, expected {api.staking_contract_address}'
        )

    for vault_contract in [
        api.zrx_vault_contract,
        api.eth_vault_contract,
        api.reward_vault_contract,
    ]:
        staking_proxy_address = await vault_contract.staking_proxy_address()
        if staking_proxy_address != api.staking_proxy_contract.address:
            logger.warning(
                'Vault %s is attached to staking proxy %s instead of %s',
                vault_contract.address,
                staking_proxy_address,
                api.staking_proxy_contract.address,
            )
