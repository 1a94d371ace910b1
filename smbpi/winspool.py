import collections
import logging
import subprocess

from smbpi import SpoolerError, InstallationFailed

logger = logging.getLogger(__name__)

TIMEOUT = 60


def powershell(script, timeout=TIMEOUT):
    cmd = ['powershell.exe', '-NoProfile', '-ExecutionPolicy', 'Bypass', '-Command', script]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        raise SpoolerError('powershell failed: {!r}'.format(e))

    if result.returncode != 0:
        raise SpoolerError('powershell failed (exit {}): {}'.format(result.returncode, result.stderr.strip()))
    return result.stdout


def add_credential(host, user, password):
    cmd = ['cmdkey', '/add:{}'.format(host), '/user:{}'.format(user), '/pass:{}'.format(password)]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=TIMEOUT)
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        raise SpoolerError('cmdkey failed: {!r}'.format(e))

    if result.returncode != 0:
        raise SpoolerError('cmdkey failed (exit {}): {}'.format(result.returncode, result.stdout.strip()))

    logger.info('credential cached for {}, user: {}'.format(host, user))


def _short_name(device_id):
    return device_id.rsplit('\\', 1)[-1]


class Printers(collections.UserDict):
    needs_password = True

    def __init__(self, wmi=None):
        if wmi is None:
            from win32com.client import GetObject
            wmi = GetObject('winmgmts:/root/cimv2')

        self._Printer = wmi.Get('Win32_Printer')

        super().__init__()
        self._load()

    def _load(self):
        self.data.clear()
        for _ in self._Printer.instances_():
            self.data[_short_name(_.DeviceID)] = Queue(_)

    def add(self, printer, ppd, username=None):
        if ppd:
            logger.info('driver for {} comes from the print server, ignoring {}'.format(repr(printer.name), repr(ppd)))

        method = self._Printer.Methods_('AddPrinterConnection')
        in_parms = method.InParameters.SpawnInstance_()
        in_parms.Name = printer.unc

        try:
            out = self._Printer.ExecMethod_('AddPrinterConnection', in_parms)
        except Exception as e:
            raise InstallationFailed('cannot connect {}: {!r}'.format(printer.unc, e))

        if out.ReturnValue != 0:
            raise InstallationFailed('cannot connect {}: return value {}'.format(printer.unc, out.ReturnValue))

        self._load()

        try:
            queue = self.data[printer.share]
        except KeyError:
            raise InstallationFailed('connection {} not found after adding it'.format(printer.unc))

        queue.location = printer.location
        queue.save()
        return queue

    def __delitem__(self, key):
        try:
            self.data[key].win32obj.Delete_()
        except Exception as e:
            raise SpoolerError('cannot delete {}: {!r}'.format(self.data[key].name, e))
        del self.data[key]

    def cache_credential(self, server, username, password):
        add_credential(server, username, password)

    def discard(self, printer):
        if printer.share not in self.data:
            return False

        try:
            del self[printer.share]
        except SpoolerError as e:
            logger.debug('no stale connection {} removed: {!r}'.format(printer.unc, e))
            return False
        return True

    def activate(self, queue):
        pass

    def enable_features(self, queue, probe=False):
        logger.debug('{}: installable options come from the server driver'.format(repr(queue.name)))
        return []

    def set_default_simplex(self, queue, probe=False):
        script = "Set-PrintConfiguration -PrinterName '{}' -DuplexingMode OneSided".format(
            queue.name.replace("'", "''"))
        try:
            powershell(script)
        except SpoolerError as e:
            logger.debug('simplex default not applied to {}: {}'.format(repr(queue.name), e))
            return None
        return 'OneSided'

    def send_auth_probe(self, queue):
        # AddPrinterConnection already authenticated against the server.
        logger.info('{}: connection authenticated while adding it'.format(repr(queue.name)))
        return True


class Queue:
    def __init__(self, win32obj):
        self.win32obj = win32obj

        self._old_location = self.location

    @property
    def name(self):
        return self.win32obj.DeviceID

    @property
    def location(self):
        return self.win32obj.Location

    @location.setter
    def location(self, v):
        self.win32obj.Location = v

    def save(self):
        if self._old_location == self.location:
            return

        try:
            self.win32obj.Put_()
        except Exception as e:
            logger.debug('location not saved for {}: {!r}'.format(repr(self.name), e))
            return

        logger.info('name: {}, location: {}'.format(self.name, self.location))
        self._old_location = self.location
