import asyncio
import logging
import time

import src
from src.api import build_staking_api
from src.common.clients import (
    close_clients,
    execution_client,
    get_owner_address,
    setup_execution_client,
)
from src.common.execution import get_balance
from src.common.interrupt import InterruptHandler
from src.common.startup_check import startup_checks
from src.config.settings import (
    LOG_LEVEL,
    METRICS_HOST,
    METRICS_PORT,
    NETWORK,
    POLL_INTERVAL,
    SENTRY_DSN,
    WEB3_LOG_LEVEL,
)
from src.metrics import metrics, metrics_server

logging.basicConfig(
    format='%(asctime)s %(name)s %(levelname)-8s %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    level=LOG_LEVEL,
)

logging.getLogger('web3').setLevel(WEB3_LOG_LEVEL)

logger = logging.getLogger(__name__)


def log_start() -> None:
    logger.info('Starting staking keeper service, version %s', src.__version__)


async def main() -> None:
    log_start()
    await setup_execution_client(execution_client)
    owner_address = get_owner_address()
    api = build_staking_api(execution_client, owner_address)
    await startup_checks(execution_client, api)

    logger.info('Starting metrics server: %s:%i', METRICS_HOST, METRICS_PORT)
    await metrics_server()
    metrics.set_owner_account(owner_address)
    logger.info('Started staking keeper service...')

    try:
        with InterruptHandler() as interrupt_handler:
            while not interrupt_handler.exit:
                start_time = time.time()
                try:
                    metrics.current_epoch.set(await api.get_current_epoch())
                    await api.process_epoch()
                    metrics.owner_balance.set(await get_balance(execution_client, owner_address))
                except Exception as exc:
                    logger.exception(exc)

                processing_time = time.time() - start_time
                sleep_time = max(float(POLL_INTERVAL) - processing_time, 0)
                await interrupt_handler.sleep(sleep_time)
    finally:
        await close_clients()


if __name__ == '__main__':
    if SENTRY_DSN:
        import sentry_sdk

        sentry_sdk.init(
            SENTRY_DSN,
            traces_sample_rate=0.1,
            environment=NETWORK,
        )
        sentry_sdk.set_tag('network', NETWORK)
        sentry_sdk.set_tag('project_version', src.__version__)

    asyncio.run(main())
