from smbpi.des import ep

# A printers set file needs a 'printers' sequence. 'groups' is optional and
# drives the interactive menu: label -> printers.

SERVER = 'rsm-print.ad.ucsd.edu'

PPD_DIR = '/Library/Printers/PPDs/Contents/Resources'


def _ppds(*names):
    paths = []
    for name in names:
        paths.append('{}/{}.gz'.format(PPD_DIR, name))
        paths.append('{}/en.lproj/{}.gz'.format(PPD_DIR, name))
    return tuple(paths)


XEROX_C8200_PPDS = _ppds('Xerox AltaLink C8200 Series', 'Xerox AltaLink C8230')
HP_CP4025_PPDS = _ppds('HP Color LaserJet CP4025')
XEROX_B8145_PPDS = _ppds('Xerox AltaLink B8145', 'Xerox AltaLink B8100 Series')


students = [
    ep(SERVER, 'rsm-2s111-xerox', '2nd Floor / South / Help Desk', XEROX_C8200_PPDS),
    ep(SERVER, 'rsm-2w107-xerox', '2nd Floor / West / Grad Student Lounge', XEROX_C8200_PPDS),
]

floor_2e = [ep(SERVER, 'rsm-2e132-xerox-bw-mac', '2nd Floor / East', XEROX_B8145_PPDS)]

floor_3s = [ep(SERVER, 'rsm-3s143-xerox-mac', '3rd Floor / South', XEROX_C8200_PPDS)]

floor_3w = [
    ep(SERVER, 'rsm-3w111-hp-color', '3rd Floor / West', HP_CP4025_PPDS),
    ep(SERVER, 'rsm-3w111-xerox-bw-mac', '3rd Floor / West', XEROX_B8145_PPDS),
]

floor_4s = [ep(SERVER, 'rsm-4s143-xerox-mac', '4th Floor / South', XEROX_C8200_PPDS)]

floor_4w = [
    ep(SERVER, 'rsm-4w111-hp-color', '4th Floor / West', HP_CP4025_PPDS),
    ep(SERVER, 'rsm-4w111-xerox-bw-mac', '4th Floor / West', XEROX_B8145_PPDS),
]

floor_5w = [ep(SERVER, 'rsm-5w109-xerox-mac', '5th Floor / West', XEROX_C8200_PPDS)]

phd = [
    ep(SERVER, 'rsm-3n127-hp-color', '3rd Floor / North / PhD', HP_CP4025_PPDS),
    ep(SERVER, 'rsm-3n127-xerox-bw-mac', '3rd Floor / North / PhD', XEROX_B8145_PPDS),
]

groups = {
    'Students - 2nd Floor (South + West)': students,
    '2nd Floor East': floor_2e,
    '3rd Floor South': floor_3s,
    '3rd Floor West': floor_3w,
    '4th Floor South': floor_4s,
    '4th Floor West': floor_4w,
    '5th Floor West': floor_5w,
    'PhD (3rd Floor North)': phd,
}

printers = students + floor_2e + floor_3s + floor_3w + floor_4s + floor_4w + floor_5w + phd

remove_prefix = 'rsm-'
