import os

import pytest

# set environment variables
os.environ['NETWORK'] = 'ganache'
os.environ['EXECUTION_ENDPOINT'] = 'http://127.0.0.1:8545'
os.environ['STAKING_PROXY_CONTRACT_ADDRESS'] = '0xa26e80e7dea86279c6d778d702cc413e6cffa777'
os.environ['STAKING_CONTRACT_ADDRESS'] = '0x2a17c35ff147b32f13f19f2e311446eeb02503f3'
os.environ['ZRX_TOKEN_CONTRACT_ADDRESS'] = '0xe41d2489571d322189246dafa5ebde1f4699f498'

from src.api import StakingApiWrapper  # noqa: E402
from src.common.tests.factories import create_address  # noqa: E402
from src.common.tests.fakes import (  # noqa: E402
    FakeChain,
    FakeERC20Contract,
    FakeStakingContract,
    FakeStakingProxyContract,
    FakeVaultContract,
)


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def staking_contract(chain: FakeChain) -> FakeStakingContract:
    return FakeStakingContract(chain)


@pytest.fixture
def staking_api(chain: FakeChain, staking_contract: FakeStakingContract) -> StakingApiWrapper:
    staking_contract_address = create_address()
    # staking calls go through the proxy address
    staking_proxy_contract = FakeStakingProxyContract(
        address=staking_contract.address, staking_contract_address=staking_contract_address
    )
    return StakingApiWrapper(
        chain_clock=chain,  # type: ignore[arg-type]
        owner_address=create_address(),
        staking_proxy_contract=staking_proxy_contract,  # type: ignore[arg-type]
        staking_contract=staking_contract,  # type: ignore[arg-type]
        staking_contract_address=staking_contract_address,
        zrx_vault_contract=FakeVaultContract(staking_contract.address),  # type: ignore[arg-type]
        eth_vault_contract=FakeVaultContract(staking_contract.address),  # type: ignore[arg-type]
        reward_vault_contract=FakeVaultContract(staking_contract.address),  # type: ignore[arg-type]
        zrx_token_contract=FakeERC20Contract(),  # type: ignore[arg-type]
        default_params=staking_contract.params,
    )
