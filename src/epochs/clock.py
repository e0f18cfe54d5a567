import logging

from src.common.contracts import StakingContract
from src.common.execution import ChainClock

logger = logging.getLogger(__name__)


async def fast_forward_to_next_epoch(
    chain_clock: ChainClock, staking_contract: StakingContract
) -> int:
    """
    Moves development node time to the earliest end of the current epoch
    and mines a block with the new timestamp.
    Returns number of seconds the clock was advanced by.
    """
    # increase timestamp of next block by how many seconds we need to
    # get to the next epoch.
    epoch_end_time = await staking_contract.get_current_epoch_earliest_end_time()
    last_block_time = await chain_clock.get_block_timestamp('latest')
    dt = max(0, epoch_end_time - last_block_time)
    await chain_clock.increase_time(dt)
    # mine next block
    await chain_clock.mine_block()

    logger.debug('Fast-forwarded %d seconds to epoch end time %d', dt, epoch_end_time)
    return dt
