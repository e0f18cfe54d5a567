from dataclasses import dataclass

from web3.types import Wei

from src.pools.typings import PoolId


@dataclass(frozen=True)
class EndOfEpochInfo:
    """
    Outcome of closing an epoch.
    Active pool ids are captured before the close call.
    """

    closing_epoch: int
    active_pool_ids: list[PoolId]
    rewards_available: Wei
    total_fees_collected: Wei
    total_weighted_stake: int
