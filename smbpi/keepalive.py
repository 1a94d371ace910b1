import logging
import subprocess
import threading

from smbpi import SmbpiError

logger = logging.getLogger(__name__)


class PrivilegeError(SmbpiError):
    pass


class SudoKeepalive:
    """Keep the cached sudo credentials fresh while a long install runs.

    ``sudo -v`` is validated once on entry (this is where the password prompt
    appears), then a daemon thread refreshes the timestamp every ``interval``
    seconds with ``sudo -n true`` until the block exits.
    """

    def __init__(self, enabled=True, interval=60):
        self.enabled = enabled
        self.interval = interval
        self._stop = threading.Event()
        self._thread = None

    def __enter__(self):
        if not self.enabled:
            return self

        try:
            result = subprocess.run(['sudo', '-v'])
        except FileNotFoundError:
            raise PrivilegeError('sudo command not found')

        if result.returncode != 0:
            raise PrivilegeError('sudo -v failed (exit {})'.format(result.returncode))

        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name='sudo-keepalive', daemon=True)
        self._thread.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=5)
            self._thread = None
        return False

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        while not self._stop.wait(self.interval):
            result = subprocess.run(['sudo', '-n', 'true'], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            if result.returncode != 0:
                logger.warning('sudo timestamp could not be refreshed (exit {})'.format(result.returncode))
