import collections
import logging
import os
import subprocess

from smbpi import SpoolerError, InstallationFailed
from smbpi.ppd.utils import parse_lpoptions, pick_choice

logger = logging.getLogger(__name__)

TIMEOUT = 60

# Capability keys vary by vendor and model; every one is tried, misses are ignored.
FEATURE_OPTIONS = (
    ('Option1', 'True'),
    ('Duplexer', 'True'),
    ('Duplexer', 'Installed'),
    ('OptionDuplex', 'Installed'),
    ('DuplexUnit', 'Installed'),
    ('InstalledDuplex', 'True'),
    ('Stapler', 'Installed'),
    ('Finisher', 'Installed'),
    ('FinisherInstalled', 'True'),
    ('StapleUnit', 'Installed'),
)

SIMPLEX_CHOICES = ('None', 'Off', 'Simplex')

TEST_PAGE = '/System/Library/Printers/Libraries/PrintJobMgr.framework/Versions/A/Resources/TestPage.pdf'
PROBE_TEXT = 'Authentication probe\n'


def run(cmd, input=None, timeout=TIMEOUT):
    try:
        return subprocess.run(cmd, input=input, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError:
        raise SpoolerError('{} command not found. Is CUPS installed?'.format(cmd[0]))
    except subprocess.TimeoutExpired:
        raise SpoolerError('{} command timed out after {}s'.format(cmd[0], timeout))


def check(cmd, input=None, timeout=TIMEOUT):
    result = run(cmd, input=input, timeout=timeout)
    if result.returncode != 0:
        raise SpoolerError('{} failed (exit {}): {}'.format(' '.join(cmd), result.returncode,
                                                            result.stderr.strip()))
    return result.stdout


def admin(sudo, *args):
    cmd = list(args)
    if sudo:
        cmd = ['sudo', '-n'] + cmd
    return cmd


def list_queues():
    # lpstat exits non-zero when no destination exists yet.
    names = []
    for line in run(['lpstat', '-p']).stdout.splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[0] == 'printer':
            names.append(parts[1])
    return names


class Queue:
    def __init__(self, name, sudo=False):
        self.name = name
        self.sudo = sudo

    def __repr__(self):
        return 'Queue({!r})'.format(self.name)

    def accept(self):
        check(admin(self.sudo, 'cupsaccept', self.name))

    def enable(self):
        check(admin(self.sudo, 'cupsenable', self.name))

    def set_option(self, key, value):
        try:
            check(admin(self.sudo, 'lpadmin', '-p', self.name, '-o', '{}={}'.format(key, value)))
        except SpoolerError as e:
            logger.debug('option {}={} not applied to {}: {}'.format(key, value, repr(self.name), e))
            return False
        return True

    def options(self):
        return parse_lpoptions(run(['lpoptions', '-p', self.name, '-l']).stdout)

    def print_file(self, path):
        return check(['lp', '-d', self.name, path])

    def print_text(self, text):
        return check(['lp', '-d', self.name], input=text)


class Printers(collections.UserDict):
    needs_password = False

    def __init__(self, sudo=False, load=True):
        super().__init__()
        self.sudo = sudo

        if load:
            for name in list_queues():
                self.data[name] = Queue(name, sudo)

    def add(self, printer, ppd, username=None):
        cmd = admin(self.sudo, 'lpadmin',
                    '-p', printer.name,
                    '-E',
                    '-v', printer.uri,
                    '-D', printer.description,
                    '-L', printer.location,
                    '-m', ppd,
                    '-o', 'auth-info-required=negotiate')
        if username:
            cmd += ['-o', 'auth-info-username-default={}'.format(username)]

        try:
            check(cmd)
        except SpoolerError as e:
            raise InstallationFailed('cannot create queue {!r}: {}'.format(printer.name, e))

        logger.info('name: {}, uri: {}, ppd: {}'.format(printer.name, printer.uri, ppd))

        queue = Queue(printer.name, self.sudo)
        self.data[printer.name] = queue
        return queue

    def __delitem__(self, key):
        if key not in self.data:
            raise KeyError(key)

        check(admin(self.sudo, 'lpadmin', '-x', key))
        del self.data[key]

    def discard(self, printer):
        try:
            check(admin(self.sudo, 'lpadmin', '-x', printer.name))
        except SpoolerError as e:
            logger.debug('no stale queue {} removed: {}'.format(repr(printer.name), e))
            return False
        finally:
            self.data.pop(printer.name, None)
        return True

    def activate(self, queue):
        queue.accept()
        queue.enable()

    def enable_features(self, queue, probe=False):
        if probe:
            supported = queue.options()
            options = [(k, v) for k, v in FEATURE_OPTIONS if k in supported]
        else:
            options = FEATURE_OPTIONS

        return [(k, v) for k, v in options if queue.set_option(k, v)]

    def set_default_simplex(self, queue, probe=False):
        value = 'None'

        if probe:
            choices, _default = queue.options().get('Duplex', ([], None))
            value = pick_choice(choices, SIMPLEX_CHOICES)
            if value is None:
                logger.debug('{} exposes no simplex choice for Duplex'.format(repr(queue.name)))
                return None

        if queue.set_option('Duplex', value):
            return value
        return None

    def send_auth_probe(self, queue):
        try:
            if os.path.isfile(TEST_PAGE):
                queue.print_file(TEST_PAGE)
            else:
                queue.print_text(PROBE_TEXT)
        except SpoolerError as e:
            logger.debug('auth probe for {} failed: {}'.format(repr(queue.name), e))
            return False
        return True
