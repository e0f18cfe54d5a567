from prometheus_client import Counter, Gauge, Info, start_http_server

from src import _get_project_meta
from src.config.settings import METRICS_HOST, METRICS_PORT, NETWORK


class Metrics:
    def __init__(self) -> None:
        self.app_version = Info('app_version', 'Staking keeper version', labelnames=['network'])
        self.owner_account = Info(
            'owner_account', 'Staking keeper owner account', labelnames=['network']
        )
        self.current_epoch = Gauge('current_epoch', 'Staking protocol current epoch')
        self.active_pools = Gauge('active_pools', 'Number of pools active in the last closed epoch')
        self.finalization_gas_used = Gauge(
            'finalization_gas_used', 'Gas used by the last pools finalization'
        )
        self.finalized_epochs = Counter(
            'finalized_epochs', 'Number of epochs keeper ended and finalized'
        )
        self.owner_balance = Gauge('owner_balance', 'Owner account balance')

    def set_app_version(self) -> None:
        self.app_version.labels(network=NETWORK).info({'version': _get_project_meta()['version']})

    def set_owner_account(self, owner_address: str) -> None:
        self.owner_account.labels(network=NETWORK).info({'owner_account': owner_address})


metrics = Metrics()
metrics.set_app_version()


async def metrics_server() -> None:
    start_http_server(METRICS_PORT, METRICS_HOST)
