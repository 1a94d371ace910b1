import gzip
import logging
import os
import zlib

import chardet

import smbpi.ppd
from smbpi.des import Driver, GENERIC_PPD

logger = logging.getLogger(__name__)

GZIP_MAGIC = b'\x1f\x8b'

GENERIC_MODEL = 'Generic PostScript Printer'


def resolve(driver, generic=None, exists=os.path.isfile):
    if isinstance(driver, Driver):
        candidates = driver.candidates
        generic = generic or driver.generic
    else:
        candidates = driver or ()

    for path in candidates:
        if exists(path):
            return path

    return generic or GENERIC_PPD


def is_generic(ppd):
    return '://' in ppd


def read_bytes(path):
    with open(path, 'rb') as f:
        b = f.read()

    if b[:2] == GZIP_MAGIC:
        b = gzip.decompress(b)

    return b


def decode(b):
    encoding = chardet.detect(b)['encoding'] or 'latin-1'
    return b.decode(encoding, errors='replace')


def load(path):
    return smbpi.ppd.loads.loads(decode(read_bytes(path)))


def _load_or_none(path):
    try:
        return load(path)
    except (OSError, EOFError, zlib.error) as e:
        logger.warning('cannot read ppd {}: {!r}'.format(repr(path), e))
        return None


def describe(path):
    if is_generic(path):
        return GENERIC_MODEL

    ppddata = _load_or_none(path)
    if ppddata is None:
        return None

    return smbpi.ppd.utils.get_model(ppddata)


def details(path):
    if is_generic(path):
        return {'model': GENERIC_MODEL, 'manufacturer': None, 'duplex_default': None, 'options': {}}

    ppddata = _load_or_none(path)
    if ppddata is None:
        return None

    return {
        'model': smbpi.ppd.utils.get_model(ppddata),
        'manufacturer': smbpi.ppd.utils.get_manufacturer(ppddata),
        'duplex_default': smbpi.ppd.utils.get_default(ppddata, 'Duplex'),
        'options': smbpi.ppd.utils.get_options(ppddata),
    }
