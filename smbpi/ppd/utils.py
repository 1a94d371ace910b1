MODEL_KEYWORDS = ('NickName', 'ModelName', 'ShortNickName', 'Product')


def get_model(ppddata):
    keywords = ppddata['keywords']
    for k in MODEL_KEYWORDS:
        if keywords.get(k):
            return keywords[k].strip('()')
    return None


def get_manufacturer(ppddata):
    return ppddata['keywords'].get('Manufacturer')


def get_options(ppddata):
    return dict((name, list(ui['choices'])) for name, ui in ppddata['options'].items())


def get_default(ppddata, option):
    for name, ui in ppddata['options'].items():
        if name.lower() == option.lower():
            return ui['default']


def parse_lpoptions(strings: str):
    """Parse ``lpoptions -p <queue> -l`` output.

    Each line looks like ``Duplex/2-Sided Printing: *None DuplexNoTumble DuplexTumble``,
    the starred choice being the current default. Returns ``{key: (choices, default)}``.
    """
    options = {}

    for line in strings.splitlines():
        head, sep, tail = line.partition(':')
        if not sep:
            continue

        key = head.split('/', 1)[0].strip()
        if not key:
            continue

        choices = []
        default = None
        for choice in tail.split():
            if choice.startswith('*'):
                choice = choice[1:]
                default = choice
            choices.append(choice)

        options[key] = (choices, default)

    return options


def pick_choice(choices, preferred):
    lowered = dict((c.lower(), c) for c in choices)
    for p in preferred:
        if p.lower() in lowered:
            return lowered[p.lower()]
    return None
