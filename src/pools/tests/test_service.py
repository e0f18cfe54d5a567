import dataclasses
from unittest.mock import patch

import pytest
from hexbytes import HexBytes
from web3 import Web3
from web3.datastructures import AttributeDict
from web3.exceptions import ContractLogicError
from web3.types import Wei

from src.common.exceptions import ProtocolInvariantError
from src.common.tests.factories import create_address, create_pool_id
from src.pools.service import (
    create_staking_pool,
    get_params,
    get_zrx_vault_balance,
    set_params,
)
from src.pools.typings import DEFAULT_PARAMS, PPM, StakingParams

PARAMS_OVERRIDES = {
    'epoch_duration_in_seconds': 7 * 24 * 60 * 60,
    'reward_delegated_stake_weight': PPM // 2,
    'minimum_pool_stake': Web3.to_wei(50, 'ether'),
    'maximum_makers_in_pool': 3,
    'cobb_douglas_alpha_numerator': 2,
    'cobb_douglas_alpha_denominator': 3,
    'weth_proxy_address': create_address(),
    'eth_vault_address': create_address(),
    'reward_vault_address': create_address(),
    'zrx_vault_address': create_address(),
}


class TestCreateStakingPool:
    async def test_basic(self, staking_contract):
        operator_address = create_address()

        pool_id = await create_staking_pool(
            staking_contract,
            operator_address=operator_address,
            operator_share=100_000,
            add_operator_as_maker=False,
        )

        assert pool_id == '0x' + '00' * 31 + '01'
        assert staking_contract.pools == {pool_id: operator_address}

    async def test_pool_ids_are_unique(self, staking_contract):
        pool_ids = [
            await create_staking_pool(
                staking_contract,
                operator_address=create_address(),
                operator_share=PPM,
                add_operator_as_maker=True,
            )
            for _ in range(3)
        ]

        assert len(set(pool_ids)) == 3

    async def test_invalid_operator_share(self, staking_contract):
        with pytest.raises(ContractLogicError):
            await create_staking_pool(
                staking_contract,
                operator_address=create_address(),
                operator_share=PPM + 1,
                add_operator_as_maker=False,
            )

        assert staking_contract.pools == {}

    async def test_pool_id_is_taken_from_created_event(self, chain, staking_contract):
        pool_id = create_pool_id()
        operator_address = create_address()
        # maker event goes first
        receipt = await chain.transact(
            (
                'MakerStakingPoolSet',
                {'makerAddress': operator_address, 'poolId': HexBytes(create_pool_id())},
            ),
            (
                'StakingPoolCreated',
                {'poolId': HexBytes(pool_id), 'operator': operator_address, 'operatorShare': 0},
            ),
        )

        with patch.object(staking_contract, 'create_staking_pool', return_value=receipt):
            created_pool_id = await create_staking_pool(
                staking_contract,
                operator_address=operator_address,
                operator_share=0,
                add_operator_as_maker=True,
            )

        assert created_pool_id == pool_id

    @pytest.mark.parametrize('events_count', [0, 2])
    async def test_unexpected_created_events(self, chain, staking_contract, events_count):
        receipt = await chain.transact()
        event = AttributeDict({'args': AttributeDict({'poolId': HexBytes(create_pool_id())})})

        with (
            patch.object(staking_contract, 'create_staking_pool', return_value=receipt),
            patch.object(
                staking_contract,
                'get_staking_pool_created_events',
                return_value=[event] * events_count,
            ),
            pytest.raises(ProtocolInvariantError),
        ):
            await create_staking_pool(
                staking_contract,
                operator_address=create_address(),
                operator_share=0,
                add_operator_as_maker=False,
            )


class TestSetParams:
    async def test_defaults(self, staking_contract):
        await set_params(staking_contract, DEFAULT_PARAMS)

        assert await get_params(staking_contract) == DEFAULT_PARAMS

    @pytest.mark.parametrize('field_name', list(PARAMS_OVERRIDES))
    async def test_single_field(self, staking_contract, field_name):
        value = PARAMS_OVERRIDES[field_name]

        await set_params(staking_contract, DEFAULT_PARAMS, **{field_name: value})

        params = await get_params(staking_contract)
        assert getattr(params, field_name) == value
        assert params == dataclasses.replace(DEFAULT_PARAMS, **{field_name: value})

    async def test_all_fields(self, staking_contract):
        await set_params(staking_contract, DEFAULT_PARAMS, **PARAMS_OVERRIDES)

        assert await get_params(staking_contract) == StakingParams(**PARAMS_OVERRIDES)

    async def test_defaults_are_not_changed(self, staking_contract):
        await set_params(staking_contract, DEFAULT_PARAMS, maximum_makers_in_pool=1)
        await set_params(staking_contract, DEFAULT_PARAMS, minimum_pool_stake=1)

        params = await get_params(staking_contract)
        assert params.maximum_makers_in_pool == DEFAULT_PARAMS.maximum_makers_in_pool
        assert params.minimum_pool_stake == 1

    async def test_unknown_field(self, staking_contract):
        with pytest.raises(TypeError):
            await set_params(staking_contract, DEFAULT_PARAMS, unknown_param=1)

        assert await get_params(staking_contract) == DEFAULT_PARAMS

    async def test_rejected_params(self, staking_contract):
        with pytest.raises(ContractLogicError):
            await set_params(
                staking_contract,
                DEFAULT_PARAMS,
                cobb_douglas_alpha_numerator=3,
                cobb_douglas_alpha_denominator=2,
            )

        assert await get_params(staking_contract) == DEFAULT_PARAMS


class TestStakingParams:
    def test_field_order(self):
        assert StakingParams.field_names() == (
            'epoch_duration_in_seconds',
            'reward_delegated_stake_weight',
            'minimum_pool_stake',
            'maximum_makers_in_pool',
            'cobb_douglas_alpha_numerator',
            'cobb_douglas_alpha_denominator',
            'weth_proxy_address',
            'eth_vault_address',
            'reward_vault_address',
            'zrx_vault_address',
        )

    def test_from_tuple_checksums_addresses(self):
        address = create_address()
        values = list(DEFAULT_PARAMS.to_tuple())
        values[-1] = address.lower()

        params = StakingParams.from_tuple(values)

        assert params.zrx_vault_address == address

    def test_from_tuple_wrong_length(self):
        with pytest.raises(ValueError):
            StakingParams.from_tuple(DEFAULT_PARAMS.to_tuple()[:-1])


class TestGetZrxVaultBalance:
    async def test_basic(self, staking_api):
        zrx_token_contract = staking_api.zrx_token_contract
        zrx_vault_address = staking_api.zrx_vault_contract.address

        assert await get_zrx_vault_balance(zrx_token_contract, zrx_vault_address) == 0

        zrx_token_contract.balances[zrx_vault_address] = Wei(Web3.to_wei(1000, 'ether'))
        assert await get_zrx_vault_balance(zrx_token_contract, zrx_vault_address) == Web3.to_wei(
            1000, 'ether'
        )
