import subprocess
import time
from unittest.mock import patch

import pytest

from smbpi.keepalive import SudoKeepalive, PrivilegeError


def completed(returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode)


def test_disabled_is_a_no_op():
    with patch('smbpi.keepalive.subprocess.run') as mock_run:
        with SudoKeepalive(enabled=False) as keepalive:
            assert not keepalive.running

    mock_run.assert_not_called()


def test_validates_then_refreshes_until_exit():
    with patch('smbpi.keepalive.subprocess.run', return_value=completed()) as mock_run:
        with SudoKeepalive(interval=0.01) as keepalive:
            assert keepalive.running
            deadline = time.time() + 2
            while mock_run.call_count < 3 and time.time() < deadline:
                time.sleep(0.01)

        assert not keepalive.running
        calls = [c[0][0] for c in mock_run.call_args_list]

    assert calls[0] == ['sudo', '-v']
    assert calls[1] == ['sudo', '-n', 'true']


def test_failed_validation_raises():
    with patch('smbpi.keepalive.subprocess.run', return_value=completed(1)):
        with pytest.raises(PrivilegeError):
            with SudoKeepalive():
                pass


def test_sudo_not_installed():
    with patch('smbpi.keepalive.subprocess.run', side_effect=FileNotFoundError()):
        with pytest.raises(PrivilegeError, match='not found'):
            SudoKeepalive().__enter__()
