from eth_account import Account
from eth_account.signers.local import LocalAccount

from src.config.settings import PRIVATE_KEY


def get_owner_account() -> LocalAccount | None:
    if not PRIVATE_KEY:
        return None
    return Account.from_key(PRIVATE_KEY)


owner_account = get_owner_account()
