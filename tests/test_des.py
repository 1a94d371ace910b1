import pytest

from smbpi.des import (Driver, Printer, ParameterError, ep, GENERIC_PPD, PROMPT_NOW,
                       PROMPT_ON_FIRST_USE)


def test_printer_defaults_share_and_description_to_name():
    p = Printer('rsm-2s111-xerox', 'rsm-print.ad.ucsd.edu', location='2nd Floor / South')

    assert p.share == 'rsm-2s111-xerox'
    assert p.description == 'rsm-2s111-xerox'
    assert p.auth == PROMPT_ON_FIRST_USE
    assert p.driver == Driver()
    assert p.driver.generic == GENERIC_PPD


def test_printer_uri_uses_share():
    p = ep('rsm-print.ad.ucsd.edu', 'rsm-3w111-hp-color', share='3w111-color')

    assert p.uri == 'smb://rsm-print.ad.ucsd.edu/3w111-color'
    assert p.unc == '\\\\rsm-print.ad.ucsd.edu\\3w111-color'


def test_printer_is_immutable():
    p = ep('server', 'q1')

    with pytest.raises(AttributeError):
        p.name = 'q2'


def test_printers_compare_by_value():
    assert ep('server', 'q1', 'Lobby', ['/a.ppd']) == ep('server', 'q1', 'Lobby', ('/a.ppd',))


def test_driver_accepts_single_path():
    assert Driver('/a.ppd').candidates == ('/a.ppd',)


def test_driver_empty_generic_falls_back():
    assert Driver((), generic='').generic == GENERIC_PPD


@pytest.mark.parametrize('kwargs', [
    dict(name='', server='server'),
    dict(name='q1', server=''),
    dict(name='q1', server='server', auth='sometimes'),
])
def test_invalid_printer_raises(kwargs):
    with pytest.raises(ParameterError):
        Printer(**kwargs)


def test_ep_prompt_now():
    assert ep('server', 'q1', auth=PROMPT_NOW).auth == PROMPT_NOW


def test_printer_positional_order_matches_fields():
    p = ep('rsm-print.ad.ucsd.edu', 'rsm-3w111-hp-color', '3rd Floor / West', ['/a.ppd'],
           share='3w111-color', description='HP Color', auth=PROMPT_NOW)

    assert Printer(*p) == p
    assert Printer('q1', 'server', 'share1', 'Desc', 'Lobby').location == 'Lobby'
    assert Printer('q1', 'server', 'share1', 'Desc', 'Lobby').share == 'share1'
