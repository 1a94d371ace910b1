import os
import platform
import shutil
import sys

CUPS_TOOLS = ('lpadmin', 'cupsenable', 'cupsaccept', 'lpstat', 'lp', 'lpoptions')
WINDOWS_TOOLS = ('powershell',)

DEFAULT_REMOVE_PREFIX = 'rsm-'


def _cur_os():
    if sys.platform == 'darwin':
        return 'macos'
    elif sys.platform.startswith('win'):
        return 'windows'
    else:
        return 'linux'


CUR_OS = _cur_os()


def _logs_dir():
    if CUR_OS == 'windows':
        return os.path.join(os.getenv('LOCALAPPDATA') or os.path.expanduser('~'), 'smbpi_logs')
    elif CUR_OS == 'macos':
        return os.path.expanduser('~/Library/Logs/smbpi')
    else:
        return os.path.join(os.getenv('XDG_STATE_HOME') or os.path.expanduser('~/.local/state'), 'smbpi')


LOGS_DIR = _logs_dir()


def is_root():
    getuid = getattr(os, 'geteuid', None)
    if getuid is None:
        return False
    return getuid() == 0


def required_tools(os_=None):
    if (os_ or CUR_OS) == 'windows':
        return WINDOWS_TOOLS
    return CUPS_TOOLS


def missing_tools(tools):
    return [t for t in tools if shutil.which(t) is None]


class Config:
    __slots__ = ['server', 'prompt_now', 'username', 'probe', 'remove_prefix', 'logs_dir', 'sudo']

    def __init__(self, obj=None, **kwargs):
        for k in self.__slots__:
            setattr(self, k, getattr(obj, k, None))

        for k, v in kwargs.items():
            if v is not None:
                setattr(self, k, v)


def supply_config(config=None, **kwargs):
    c = Config(config, **kwargs)

    c.prompt_now = bool(c.prompt_now)
    c.probe = bool(c.probe)
    c.remove_prefix = c.remove_prefix or DEFAULT_REMOVE_PREFIX
    c.logs_dir = c.logs_dir or LOGS_DIR

    if c.sudo is None:
        c.sudo = CUR_OS != 'windows' and not is_root()

    return c


def log_sys_info(logger):
    logger.info('OS: {} ({})'.format(CUR_OS, platform.platform()))
    logger.info('Python sys.version: {}'.format(sys.version))
    logger.info('root: {}'.format(is_root()))
