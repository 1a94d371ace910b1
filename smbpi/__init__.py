import importlib.util
import os

_modules = {}


class SmbpiError(Exception):
    pass


class SpoolerError(SmbpiError):
    pass


class InstallationFailed(SpoolerError):
    pass


class MissingToolError(SmbpiError):
    def __init__(self, tool):
        super().__init__('missing {!r} (print spooler tools required)'.format(tool))
        self.tool = tool


def load_module(pypath, my_file=None):
    _p = ''

    if my_file is not None:
        _p = os.path.dirname(my_file)

    abs_path = os.path.abspath(os.path.join(_p, pypath))

    try:
        return _modules[abs_path]
    except KeyError:
        spec = importlib.util.spec_from_file_location(os.path.splitext(os.path.basename(abs_path))[0], abs_path)
        if spec is None:
            raise SmbpiError('cannot load printers set file: {!r}'.format(pypath))
        _module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(_module)
        _modules[abs_path] = _module

        return _module
