import logging

from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from web3 import AsyncWeb3, Web3
from web3.types import BlockIdentifier, RPCEndpoint, Timestamp, TxReceipt, Wei

from src.config.settings import EXECUTION_TRANSACTION_TIMEOUT, OWNER_MIN_BALANCE_ETH

logger = logging.getLogger(__name__)


class ChainClock:
    """
    Block time controls of a development node (ganache, hardhat, anvil).
    """

    def __init__(self, client: AsyncWeb3) -> None:
        self.client = client

    async def get_block_timestamp(self, block_identifier: BlockIdentifier = 'latest') -> Timestamp:
        block = await self.client.eth.get_block(block_identifier)
        return block['timestamp']

    async def increase_time(self, seconds: int) -> None:
        """Increases timestamp of the next block."""
        await self._make_request('evm_increaseTime', [seconds])

    async def mine_block(self) -> None:
        await self._make_request('evm_mine', [])

    async def _make_request(self, method: str, params: list) -> None:
        response = await self.client.provider.make_request(RPCEndpoint(method), params)
        if 'error' in response:
            raise RuntimeError(f'RPC error on {method}: {response["error"]}')


async def wait_for_tx_receipt(client: AsyncWeb3, tx_hash: HexBytes) -> TxReceipt:
    return await client.eth.wait_for_transaction_receipt(
        tx_hash, timeout=EXECUTION_TRANSACTION_TIMEOUT or None  # type: ignore[arg-type]
    )


async def get_balance(client: AsyncWeb3, address: ChecksumAddress) -> Wei:
    return await client.eth.get_balance(address)


async def check_owner_balance(client: AsyncWeb3, owner_address: ChecksumAddress) -> None:
    owner_min_balance = Web3.to_wei(OWNER_MIN_BALANCE_ETH, 'ether')

    if owner_min_balance <= 0:
        return

    if (await get_balance(client, owner_address)) < owner_min_balance:
        logger.warning(
            'Owner balance is too low. At least %s ETH is recommended.',
            OWNER_MIN_BALANCE_ETH,
        )
