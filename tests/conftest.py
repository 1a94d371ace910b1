import pytest

from smbpi import InstallationFailed, SpoolerError
from smbpi.des import ep
from smbpi.env import supply_config


class FakeQueue:
    def __init__(self, name):
        self.name = name


class FakeSpooler(dict):
    """In-memory spooler recording every call made against it."""

    def __init__(self, unsupported=(), fail_add=(), needs_password=False, locked_credentials=()):
        super().__init__()
        self.needs_password = needs_password
        self.locked_credentials = set(locked_credentials)
        self.calls = []
        self.state = {}
        self.unsupported = set(unsupported)
        self.fail_add = set(fail_add)

    def add(self, printer, ppd, username=None):
        self.calls.append(('add', printer.name, ppd))
        if printer.name in self.fail_add:
            raise InstallationFailed('cannot create queue {!r}'.format(printer.name))
        self[printer.name] = FakeQueue(printer.name)
        self.state[printer.name] = {'uri': printer.uri, 'ppd': ppd, 'location': printer.location,
                                    'options': {}, 'enabled': False, 'username': username}
        return self[printer.name]

    def discard(self, printer):
        self.calls.append(('discard', printer.name))
        self.pop(printer.name, None)
        return self.state.pop(printer.name, None) is not None

    def __delitem__(self, key):
        self.calls.append(('delete', key))
        if key.endswith('-locked'):
            raise SpoolerError('lpadmin -x {} failed'.format(key))
        super().__delitem__(key)
        self.state.pop(key, None)

    def activate(self, queue):
        self.calls.append(('activate', queue.name))
        self.state[queue.name]['enabled'] = True

    def enable_features(self, queue, probe=False):
        self.calls.append(('features', queue.name))
        for key in ('Duplexer', 'Finisher', 'StapleUnit'):
            if key not in self.unsupported:
                self.state[queue.name]['options'][key] = 'Installed'

    def set_default_simplex(self, queue, probe=False):
        self.calls.append(('simplex', queue.name))
        self.state[queue.name]['options']['Duplex'] = 'None'

    def send_auth_probe(self, queue):
        self.calls.append(('probe', queue.name))
        return True

    def cache_credential(self, server, username, password):
        self.calls.append(('credential', server, username))
        if server in self.locked_credentials:
            raise SpoolerError('cmdkey failed (exit 1)')


@pytest.fixture
def spooler():
    return FakeSpooler()


@pytest.fixture
def config():
    return supply_config(sudo=False)


@pytest.fixture
def printer():
    return ep('print.example.edu', 'lab-xerox', '2nd Floor / South', ('/nope/a.ppd', '/nope/b.ppd'))
