import asyncio
import logging
import signal

logger = logging.getLogger(__name__)

EXIT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class InterruptHandler:
    """
    Turns SIGINT and SIGTERM into an exit flag checked by the keeper loop.
    Running iteration is not interrupted, so sent transactions are awaited.
    Must be entered inside a running event loop.
    """

    def __init__(self) -> None:
        self.exit = False
        self._exit_event = asyncio.Event()

    def __enter__(self) -> 'InterruptHandler':
        loop = asyncio.get_running_loop()
        for sig in EXIT_SIGNALS:
            loop.add_signal_handler(sig, self._handle_signal, sig)
        return self

    def __exit__(self, *args) -> None:
        loop = asyncio.get_running_loop()
        for sig in EXIT_SIGNALS:
            loop.remove_signal_handler(sig)

    def _handle_signal(self, sig: signal.Signals) -> None:
        logger.info('Received %s signal, exiting after current iteration...', sig.name)
        self.exit = True
        self._exit_event.set()

    async def sleep(self, seconds: float) -> None:
        """Sleeps for `seconds` or until exit signal is received."""
        try:
            await asyncio.wait_for(self._exit_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass
