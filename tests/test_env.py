from unittest.mock import patch

from smbpi import load_module
from smbpi.env import Config, supply_config, required_tools, missing_tools, CUPS_TOOLS, \
    DEFAULT_REMOVE_PREFIX, LOGS_DIR


class PrintersSet:
    server = 'from-file.example.edu'
    probe = True
    remove_prefix = 'lab-'


def test_config_reads_object_attributes():
    c = Config(PrintersSet)

    assert c.server == 'from-file.example.edu'
    assert c.probe is True
    assert c.username is None


def test_keyword_overrides_win_over_object():
    c = Config(PrintersSet, server='cli.example.edu', username=None)

    assert c.server == 'cli.example.edu'
    assert c.remove_prefix == 'lab-'


def test_supply_config_defaults():
    with patch('smbpi.env.is_root', return_value=False):
        c = supply_config()

    assert c.prompt_now is False
    assert c.probe is False
    assert c.remove_prefix == DEFAULT_REMOVE_PREFIX
    assert c.logs_dir == LOGS_DIR
    assert c.sudo is True


def test_supply_config_no_sudo_as_root():
    with patch('smbpi.env.is_root', return_value=True):
        assert supply_config().sudo is False


def test_supply_config_explicit_sudo_false():
    assert supply_config(sudo=False).sudo is False


def test_load_module_is_cached(tmp_path):
    ps = tmp_path / 'cached.py'
    ps.write_text('value = 1\n')

    assert load_module(str(ps)) is load_module(str(ps))


def test_required_tools():
    assert required_tools('macos') == CUPS_TOOLS
    assert 'lpadmin' in required_tools('linux')
    assert 'powershell' in required_tools('windows')
    assert 'cmdkey' not in required_tools('windows')


def test_missing_tools():
    with patch('smbpi.env.shutil.which', side_effect=lambda t: None if t == 'lpoptions' else '/usr/bin/' + t):
        assert missing_tools(CUPS_TOOLS) == ['lpoptions']
