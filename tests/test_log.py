import datetime
import logging

import smbpi.log


def test_log_filename():
    now = datetime.datetime(2025, 10, 6, 9, 30, 1, 42)
    assert smbpi.log.log_filename(now) == '2025_10_06-09_30_01_000042.log.txt'


def test_file_handler_is_installed_once(tmp_path, monkeypatch):
    monkeypatch.setattr(smbpi.log, '_handlers', {})

    fh = smbpi.log.set_file_handler(str(tmp_path / 'logs' / 'a.log.txt'))
    try:
        assert smbpi.log.set_file_handler(str(tmp_path / 'b.log.txt')) is fh

        logging.getLogger('smbpi.test').debug('queue added')
        fh.flush()

        assert 'queue added' in (tmp_path / 'logs' / 'a.log.txt').read_text(encoding='utf8')
        assert not (tmp_path / 'b.log.txt').exists()
    finally:
        logging.getLogger().removeHandler(fh)
        fh.close()


def test_stream_handler_level_is_updated(monkeypatch):
    monkeypatch.setattr(smbpi.log, '_handlers', {})

    ch = smbpi.log.set_stream_handler()
    try:
        assert ch.level == logging.WARNING
        assert smbpi.log.set_stream_handler(logging.DEBUG) is ch
        assert ch.level == logging.DEBUG
    finally:
        logging.getLogger().removeHandler(ch)
