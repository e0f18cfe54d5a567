from eth_typing import ChecksumAddress
from web3 import AsyncWeb3
from web3.middleware import SignAndSendRawMiddlewareBuilder

from src.common.accounts import owner_account
from src.config import settings


def build_execution_client() -> AsyncWeb3:
    return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(settings.EXECUTION_ENDPOINT))


async def setup_execution_client(w3: AsyncWeb3) -> None:
    """Setup owner private key or fall back to the unlocked owner account"""
    if owner_account is not None:
        w3.middleware_onion.inject(
            # pylint: disable-next=no-value-for-parameter
            SignAndSendRawMiddlewareBuilder.build(owner_account),
            layer=0,
        )
    w3.eth.default_account = get_owner_address()


def get_owner_address() -> ChecksumAddress:
    if owner_account is not None:
        return owner_account.address
    return settings.OWNER_ADDRESS


async def close_clients() -> None:
    await execution_client.provider.disconnect()


execution_client = build_execution_client()
