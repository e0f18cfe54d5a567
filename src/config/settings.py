from decouple import config
from web3 import Web3
from web3.types import ChecksumAddress

ZERO_CHECKSUM_ADDRESS = Web3.to_checksum_address('0x' + '00' * 20)


def _to_checksum_address(value: str) -> ChecksumAddress:
    if not value:
        return ZERO_CHECKSUM_ADDRESS
    return Web3.to_checksum_address(value)


# network
NETWORK: str = config('NETWORK', default='ganache')

# connections
EXECUTION_ENDPOINT: str = config('EXECUTION_ENDPOINT', default='http://127.0.0.1:8545')

# owner
PRIVATE_KEY: str = config('PRIVATE_KEY', default='')
OWNER_ADDRESS: ChecksumAddress = config(
    'OWNER_ADDRESS', default='', cast=_to_checksum_address
)
OWNER_MIN_BALANCE_ETH: str = config('OWNER_MIN_BALANCE_ETH', default='0.01')

# deployed contracts
STAKING_PROXY_CONTRACT_ADDRESS: ChecksumAddress = config(
    'STAKING_PROXY_CONTRACT_ADDRESS', cast=Web3.to_checksum_address
)
STAKING_CONTRACT_ADDRESS: ChecksumAddress = config(
    'STAKING_CONTRACT_ADDRESS', cast=Web3.to_checksum_address
)
ZRX_VAULT_CONTRACT_ADDRESS: ChecksumAddress = config(
    'ZRX_VAULT_CONTRACT_ADDRESS', default='', cast=_to_checksum_address
)
ETH_VAULT_CONTRACT_ADDRESS: ChecksumAddress = config(
    'ETH_VAULT_CONTRACT_ADDRESS', default='', cast=_to_checksum_address
)
REWARD_VAULT_CONTRACT_ADDRESS: ChecksumAddress = config(
    'REWARD_VAULT_CONTRACT_ADDRESS', default='', cast=_to_checksum_address
)
ZRX_TOKEN_CONTRACT_ADDRESS: ChecksumAddress = config(
    'ZRX_TOKEN_CONTRACT_ADDRESS', cast=Web3.to_checksum_address
)
WETH_PROXY_ADDRESS: ChecksumAddress = config(
    'WETH_PROXY_ADDRESS', default='', cast=_to_checksum_address
)

# events
STAKING_GENESIS_BLOCK: int = config('STAKING_GENESIS_BLOCK', default=0, cast=int)
EVENTS_BLOCKS_RANGE: int = config('EVENTS_BLOCKS_RANGE', default=10_000, cast=int)

# transactions
TX_GAS_LIMIT: int = config('TX_GAS_LIMIT', default=3_000_000, cast=int)
TX_GAS_PRICE_WEI: str = config('TX_GAS_PRICE_WEI', default='')
# 0 waits for the receipt without a time limit
EXECUTION_TRANSACTION_TIMEOUT: int = config('EXECUTION_TRANSACTION_TIMEOUT', default=0, cast=int)

# keeper loop
POLL_INTERVAL: int = config('POLL_INTERVAL', default=12, cast=int)

# common
LOG_LEVEL: str = config('LOG_LEVEL', default='INFO')
WEB3_LOG_LEVEL: str = config('WEB3_LOG_LEVEL', default='INFO')

# sentry config
SENTRY_DSN: str = config('SENTRY_DSN', default='')

# Prometheus
METRICS_HOST: str = config('METRICS_HOST', default='127.0.0.1')
METRICS_PORT: int = config('METRICS_PORT', default=9100, cast=int)
