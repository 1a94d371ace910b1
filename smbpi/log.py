import datetime
import logging
import os

_handlers = {}


def log_filename(now=None):
    return (now or datetime.datetime.now()).strftime('%Y_%m_%d-%H_%M_%S_%f') + '.log.txt'


def set_file_handler(filename):
    if 'file' in _handlers:
        return _handlers['file']

    os.makedirs(os.path.dirname(os.path.abspath(filename)), exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.NOTSET)

    fh = logging.FileHandler(filename, 'w', encoding='utf8')
    fh.setFormatter(logging.Formatter(
        '[%(asctime)s %(filename)s fun:%(funcName)s line:%(lineno)d]: %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'))
    fh.setLevel(logging.NOTSET)
    root_logger.addHandler(fh)

    _handlers['file'] = fh
    return fh


def set_stream_handler(level=logging.WARNING):
    ch = _handlers.get('stream')
    if ch is None:
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter('  %(levelname)s: [%(filename)s:%(lineno)d]: %(message)s'))
        logging.getLogger().setLevel(logging.NOTSET)
        logging.getLogger().addHandler(ch)
        _handlers['stream'] = ch

    ch.setLevel(level)
    return ch
