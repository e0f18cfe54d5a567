from dataclasses import astuple, dataclass, fields
from typing import Sequence

from eth_typing import ChecksumAddress, HexStr
from web3 import Web3

from src.config.settings import ZERO_CHECKSUM_ADDRESS

PoolId = HexStr

# denominator of operator share and stake weight fractions
PPM = 1_000_000
TEN_DAYS = 10 * 24 * 60 * 60


@dataclass(frozen=True)
class StakingParams:
    """
    Global staking protocol parameters.
    Field order is the positional order of `setParams` arguments and `getParams` results.
    """

    # Order is important!
    epoch_duration_in_seconds: int
    reward_delegated_stake_weight: int
    minimum_pool_stake: int
    maximum_makers_in_pool: int
    cobb_douglas_alpha_numerator: int
    cobb_douglas_alpha_denominator: int
    weth_proxy_address: ChecksumAddress
    eth_vault_address: ChecksumAddress
    reward_vault_address: ChecksumAddress
    zrx_vault_address: ChecksumAddress

    @staticmethod
    def field_names() -> tuple[str, ...]:
        return tuple(f.name for f in fields(StakingParams))

    def to_tuple(self) -> tuple:
        return astuple(self)

    @staticmethod
    def from_tuple(values: Sequence) -> 'StakingParams':
        names = StakingParams.field_names()
        if len(values) != len(names):
            raise ValueError(f'Expected {len(names)} staking params, got {len(values)}')
        params = dict(zip(names, values))
        for name in names:
            if name.endswith('_address'):
                params[name] = Web3.to_checksum_address(params[name])
        return StakingParams(**params)


DEFAULT_PARAMS = StakingParams(
    epoch_duration_in_seconds=TEN_DAYS,
    reward_delegated_stake_weight=int(PPM * 0.9),
    minimum_pool_stake=Web3.to_wei(100, 'ether'),
    maximum_makers_in_pool=10,
    cobb_douglas_alpha_numerator=1,
    cobb_douglas_alpha_denominator=2,
    weth_proxy_address=ZERO_CHECKSUM_ADDRESS,
    eth_vault_address=ZERO_CHECKSUM_ADDRESS,
    reward_vault_address=ZERO_CHECKSUM_ADDRESS,
    zrx_vault_address=ZERO_CHECKSUM_ADDRESS,
)
