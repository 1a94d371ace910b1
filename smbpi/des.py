import collections

from smbpi import SmbpiError

GENERIC_PPD = 'drv:///sample.drv/generic.ppd'

PROMPT_ON_FIRST_USE = 'first-use'
PROMPT_NOW = 'now'

AUTH_MODES = (PROMPT_ON_FIRST_USE, PROMPT_NOW)


class ParameterError(SmbpiError):
    pass


class Driver(collections.namedtuple('Driver', ['candidates', 'generic'])):
    __slots__ = ()

    def __new__(cls, candidates=(), generic=GENERIC_PPD):
        if isinstance(candidates, str):
            candidates = (candidates,)

        return super().__new__(cls, tuple(candidates), generic or GENERIC_PPD)


_printer_fields = ['name', 'server', 'share', 'description', 'location', 'driver', 'auth']


class Printer(collections.namedtuple('Printer', _printer_fields)):
    __slots__ = ()

    def __new__(cls, name, server, share=None, description=None, location='', driver=None,
                auth=PROMPT_ON_FIRST_USE):
        if not name:
            raise ParameterError('printer name must not be empty')

        if not server:
            raise ParameterError('printer {!r} has no server'.format(name))

        if auth not in AUTH_MODES:
            raise ParameterError('unknown auth mode: {!r}'.format(auth))

        if driver is None:
            driver = Driver()
        elif not isinstance(driver, Driver):
            driver = Driver(driver)

        return super().__new__(cls,
                               name=name,
                               server=server,
                               share=share or name,
                               description=description or name,
                               location=location or '',
                               driver=driver,
                               auth=auth)

    @property
    def uri(self):
        return 'smb://{}/{}'.format(self.server, self.share)

    @property
    def unc(self):
        return '\\\\{}\\{}'.format(self.server, self.share)


def ep(server, name, location='', ppds=(), share=None, description=None, auth=PROMPT_ON_FIRST_USE,
       generic=GENERIC_PPD):

    return Printer(name=name,
                   server=server,
                   location=location,
                   driver=Driver(ppds, generic),
                   share=share,
                   description=description,
                   auth=auth)
