from hexbytes import HexBytes
from web3 import Web3


class TransactionFailedError(RuntimeError):
    """Transaction was mined but reverted."""

    def __init__(self, fn_name: str, tx_hash: HexBytes) -> None:
        self.fn_name = fn_name
        self.tx_hash = tx_hash
        super().__init__(f'{fn_name} transaction failed, tx hash: {Web3.to_hex(tx_hash)}')


class ProtocolInvariantError(RuntimeError):
    """
    Receipt does not carry the notifications the protocol guarantees.
    Indicates a protocol bug or an unexpected upgrade.
    """
