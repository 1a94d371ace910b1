import io
import re

_ENTRY = re.compile(r'^\*([^\s:]+)(?:\s+([^:]*?))?\s*:\s*(.*)$')

_OPEN_UI = ('OpenUI', 'JCLOpenUI')
_CLOSE_UI = ('CloseUI', 'JCLCloseUI')


def loads(strings: str):
    data = {'keywords': {}, 'options': {}}

    ui_name = None

    for key, option, value in _entries(strings):

        if key in _OPEN_UI:
            ui_name, _, label = (option or '').lstrip('*').partition('/')
            data['options'][ui_name] = {
                'label': label or ui_name,
                'type': value,
                'default': None,
                'choices': [],
            }

        elif key in _CLOSE_UI:
            ui_name = None

        elif key.startswith('Default') and key[len('Default'):] in data['options']:
            data['options'][key[len('Default'):]]['default'] = value

        elif ui_name is not None and key == ui_name and option:
            data['options'][ui_name]['choices'].append(option.partition('/')[0])

        elif option is None:
            data['keywords'].setdefault(key, value)

    return data


def _lines(strings):
    lines = [l.rstrip('\r\n') for l in io.StringIO(strings).readlines()]

    pending = None
    for line in lines:
        if pending is not None:
            pending += '\n' + line
            if '"' in line:
                yield pending
                pending = None
            continue

        if not line.startswith('*') or line.startswith('*%'):
            continue

        if line.count('"') % 2 == 1:
            pending = line
            continue

        yield line

    if pending is not None:
        yield pending


def _entries(strings):
    for line in _lines(strings):
        m = _ENTRY.match(line.split('\n', 1)[0])
        if m is None:
            continue

        key, option = m.group(1), m.group(2) or None

        value = line[m.start(3):].strip() if '\n' in line else m.group(3).strip()

        yield key, option, _unquote(value)


def _unquote(value):
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
        return value[1:-1]
    return value
