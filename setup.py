import os

from setuptools import setup

NAME = 'smbpi'

main_ns = {}
ver_path = os.path.join(NAME, 'version.py')
with open(ver_path) as ver_file:
    exec(ver_file.read(), main_ns)

DESCRIPTION = 'SMB Printer Installer'


URL = 'https://github.com/tgynl/' + NAME

CLASSIFIERS = [
    'Intended Audience :: Information Technology',
    'Intended Audience :: System Administrators',
    'License :: OSI Approved :: GNU Library or Lesser General Public License (LGPL)',
    'Operating System :: MacOS :: MacOS X',
    'Operating System :: Microsoft :: Windows',
    'Operating System :: POSIX :: Linux',
    'Programming Language :: Python :: 3',
    'Topic :: Printing',
    'Topic :: System :: Systems Administration',
]
with open('requirements.txt') as f:
    requirements = f.read().splitlines()

setup(name=NAME,
      version=main_ns['__version__'],
      description=DESCRIPTION,
      include_package_data=True,
      license='LGPL',
      url=URL,
      python_requires='>=3.7',
      packages=[
          'smbpi',
          'smbpi.ppd',
      ],
      entry_points={
          'console_scripts': [
               'smbpi=smbpi.main:main',
          ],
      },
      install_requires=requirements,
      extras_require={
          'test': ['pytest'],
      },
      classifiers=CLASSIFIERS)
