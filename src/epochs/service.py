import logging

from web3 import Web3
from web3.types import TxReceipt, Wei

from src.common.contracts import StakingContract
from src.common.exceptions import ProtocolInvariantError
from src.common.execution import ChainClock
from src.epochs.clock import fast_forward_to_next_epoch
from src.epochs.typings import EndOfEpochInfo
from src.metrics import metrics
from src.pools.typings import PoolId

logger = logging.getLogger(__name__)


async def find_active_pool_ids(
    staking_contract: StakingContract, epoch: int | None = None
) -> list[PoolId]:
    """
    Returns ids of pools activated in the epoch in emission order.
    Defaults to the current epoch.
    """
    if epoch is None:
        epoch = await staking_contract.get_current_epoch()

    events = await staking_contract.get_staking_pool_activated_events(epoch)
    return [PoolId(Web3.to_hex(event['args']['poolId'])) for event in events]


async def end_epoch(staking_contract: StakingContract) -> EndOfEpochInfo:
    # closing the epoch moves the current epoch, so pools are captured first
    active_pool_ids = await find_active_pool_ids(staking_contract)

    receipt = await staking_contract.end_epoch()
    events = staking_contract.get_epoch_ended_events(receipt)
    if len(events) != 1:
        raise ProtocolInvariantError(
            f'Expected single EpochEnded event, got {len(events)}. '
            f'Tx hash: {Web3.to_hex(receipt["transactionHash"])}'
        )

    args = events[0]['args']
    end_of_epoch_info = EndOfEpochInfo(
        closing_epoch=args['epoch'],
        active_pool_ids=active_pool_ids,
        rewards_available=Wei(args['rewardsAvailable']),
        total_fees_collected=Wei(args['totalFeesCollected']),
        total_weighted_stake=args['totalWeightedStake'],
    )
    logger.info(
        'Epoch %d ended: active pools=%d, rewards available=%d, '
        'total fees collected=%d, total weighted stake=%d',
        end_of_epoch_info.closing_epoch,
        len(active_pool_ids),
        end_of_epoch_info.rewards_available,
        end_of_epoch_info.total_fees_collected,
        end_of_epoch_info.total_weighted_stake,
    )
    metrics.current_epoch.set(end_of_epoch_info.closing_epoch + 1)
    metrics.active_pools.set(len(active_pool_ids))
    return end_of_epoch_info


class FinalizationState:
    """
    Keeper loop memory of the last epoch whose pools were finalized.
    Closing an epoch and finalizing its pools are separate transactions,
    so the second one can fail after the first succeeded.
    """

    def __init__(self) -> None:
        self.last_finalized_epoch: int | None = None


async def finalize_closed_epoch(staking_contract: StakingContract, epoch: int) -> TxReceipt:
    """Finalizes pools of an epoch that is already closed."""
    active_pool_ids = await find_active_pool_ids(staking_contract, epoch)
    logger.info('Finalizing %d pools of closed epoch %d', len(active_pool_ids), epoch)
    return await _finalize_pools(staking_contract, active_pool_ids)


async def finalize_epoch(staking_contract: StakingContract) -> TxReceipt:
    """Ends current epoch and finalizes pools that were active in it."""
    end_of_epoch_info = await end_epoch(staking_contract)
    return await _finalize_pools(staking_contract, end_of_epoch_info.active_pool_ids)


async def skip_to_next_epoch_and_finalize(
    chain_clock: ChainClock, staking_contract: StakingContract
) -> TxReceipt:
    await fast_forward_to_next_epoch(chain_clock, staking_contract)
    return await finalize_epoch(staking_contract)


async def process_epoch(
    chain_clock: ChainClock,
    staking_contract: StakingContract,
    finalization_state: FinalizationState,
) -> TxReceipt | None:
    """
    Finalizes current epoch once its earliest end time is reached.
    A closed epoch left without finalization is finalized first,
    the current epoch is checked on the next call.
    """
    current_epoch = await staking_contract.get_current_epoch()
    closed_epoch = current_epoch - 1
    if finalization_state.last_finalized_epoch is None:
        # epochs closed before the keeper started are not tracked
        finalization_state.last_finalized_epoch = closed_epoch

    if finalization_state.last_finalized_epoch < closed_epoch:
        receipt = await finalize_closed_epoch(staking_contract, closed_epoch)
        finalization_state.last_finalized_epoch = closed_epoch
        return receipt

    epoch_end_time = await staking_contract.get_current_epoch_earliest_end_time()
    block_time = await chain_clock.get_block_timestamp('latest')
    if block_time < epoch_end_time:
        logger.debug('Epoch ends in %d seconds, skipping...', epoch_end_time - block_time)
        return None

    receipt = await finalize_epoch(staking_contract)
    finalization_state.last_finalized_epoch = current_epoch
    return receipt


async def _finalize_pools(staking_contract: StakingContract, pool_ids: list[PoolId]) -> TxReceipt:
    receipt = await staking_contract.finalize_pools(pool_ids)

    logger.info('Finalization cost %d gas', receipt['gasUsed'])
    metrics.finalization_gas_used.set(receipt['gasUsed'])
    metrics.finalized_epochs.inc()
    return receipt
