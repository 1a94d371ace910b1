import argparse
import getpass
import logging
import os
import sys

import smbpi.log
from smbpi import load_module, version, SmbpiError, SpoolerError, MissingToolError
from smbpi.des import PROMPT_NOW
from smbpi.driver import resolve, describe, details, is_generic
from smbpi.env import CUR_OS, required_tools, missing_tools, supply_config, log_sys_info
from smbpi.keepalive import SudoKeepalive

logger = logging.getLogger(__name__)

DEFAULT_PS_NAME = 'ps.py'

TTY = '/dev/tty'


def make_spooler(config):
    if CUR_OS == 'windows':
        from smbpi.winspool import Printers
        return Printers()

    from smbpi.cups import Printers
    return Printers(sudo=config.sudo)


def check_tools(tools=None):
    missing = missing_tools(tools or required_tools())
    if missing:
        raise MissingToolError(missing[0])


def install_printer(printer, spooler, config):
    ppd = resolve(printer.driver)

    print()
    print('# Adding {!r} -> {}'.format(printer.name, printer.uri))
    print('# Location : {}'.format(printer.location))
    print('# PPD      : {}'.format(ppd))

    if is_generic(ppd):
        logger.info('no vendor ppd found for {}, using {}'.format(repr(printer.name), ppd))
    else:
        logger.info('ppd model for {}: {}'.format(repr(printer.name), describe(ppd)))

    spooler.discard(printer)

    queue = spooler.add(printer, ppd, username=config.username)

    spooler.activate(queue)
    spooler.enable_features(queue, probe=config.probe)
    spooler.set_default_simplex(queue, probe=config.probe)

    print('✔ Installed {!r}'.format(printer.name))

    if config.prompt_now or printer.auth == PROMPT_NOW:
        print('  -> Sending auth probe for {!r}...'.format(printer.name))
        spooler.send_auth_probe(queue)

    return queue


def cache_credentials(printers, config, spooler, ask_password=getpass.getpass):
    if not config.username or not spooler.needs_password:
        return []

    cached = []
    for server in sorted(set(p.server for p in printers)):
        password = ask_password('Password for {} on {}: '.format(config.username, server))
        try:
            spooler.cache_credential(server, config.username, password)
        except SpoolerError as e:
            logger.warning('credential for {} not cached: {}'.format(repr(server), e))
            print('⚠ Could not cache credentials for {!r}'.format(server))
        else:
            cached.append(server)

    return cached


def install(printers, config, spooler=None, ask_password=getpass.getpass):
    if spooler is None:
        spooler = make_spooler(config)

    if config.server:
        printers = [p._replace(server=config.server) for p in printers]

    cache_credentials(printers, config, spooler, ask_password)

    failed = []

    for p in printers:
        try:
            install_printer(p, spooler, config)
        except SpoolerError as e:
            logger.error('install printer {} failed: {}.'.format(repr(p.name), e))
            print('✘ Could not install {!r}: {}'.format(p.name, e))
            failed.append(p.name)

    return failed


def remove(prefix, spooler):
    print('▶ Removing all {}* printers...'.format(prefix))

    removed = 0
    for name in sorted(k for k in spooler.keys() if k.startswith(prefix)):
        print('  Removing {!r}...'.format(name))
        try:
            del spooler[name]
        except SpoolerError as e:
            logger.warning('remove printer {} failed: {}'.format(repr(name), e))
            print('  ⚠ Could not remove {!r}'.format(name))
        else:
            removed += 1

    if removed == 0:
        print('No {}* printers found.'.format(prefix))
    else:
        print('✔ Removed {} {}* printer(s).'.format(removed, prefix))

    return removed


def post_install_msg(config):
    print()
    if config.prompt_now:
        print('• You will be prompted for credentials now; they are saved in the keychain.')
    else:
        print('• On your first print to each queue you will be prompted for credentials.')
    print('• Enter your AD username as: ad\\username')
    print('• Duplex hardware is enabled, but the default remains single-sided.')
    print()


def print_head(server=None):
    from shutil import get_terminal_size

    hl = min([62, get_terminal_size()[0] - 2]) - 2

    print('#' * hl)
    print('{:^{}}'.format('SMB Printer Installer', hl))
    print('  Version: {}'.format(version.__version__))
    if server:
        print('  Server: {}'.format(server))
    print('#' * hl)


def read_tty():
    # Reads from the terminal so the menu still works when stdin is a pipe (curl | python).
    try:
        with open(TTY) as tty:
            line = tty.readline()
    except OSError:
        return input()

    if not line:
        raise EOFError
    return line.rstrip('\r\n')


def print_ppd_details(path):
    info = details(path)
    if info is None:
        print('  cannot read {!r}'.format(path))
        return

    print('  Model       : {}'.format(info['model']))
    print('  Manufacturer: {}'.format(info['manufacturer'] or '-'))
    print('  Duplex      : {} (default: {})'.format(' '.join(info['options'].get('Duplex', [])) or '-',
                                                   info['duplex_default'] or '-'))
    for name in sorted(info['options']):
        print('    {}: {}'.format(name, ' '.join(info['options'][name])))


def interactive_loop(module_, config, spooler, read=read_tty):
    groups = list(getattr(module_, 'groups', {}).items())
    failed = []

    print_head(getattr(module_, 'SERVER', None) or config.server)

    while True:
        print()
        print('Select the printer(s) to install:')
        for i, (label, _) in enumerate(groups, 1):
            print(' {}) {}'.format(i, label))
        print(' a) All')
        print(' l) Show the model and options of a PPD file')
        print(' r) Remove all {}* printers'.format(config.remove_prefix))
        print(' q) Quit')
        print('Your choice: ', end='', flush=True)

        try:
            choice = read().strip().lower()

            if choice in ('q', 'quit', 'e', 'exit'):
                break

            elif choice == 'a':
                failed += install(module_.printers, config, spooler)
                post_install_msg(config)

            elif choice == 'l':
                print('PPD file: ', end='', flush=True)
                print_ppd_details(read().strip())

            elif choice == 'r':
                remove(config.remove_prefix, spooler)

            elif choice.isdigit() and 1 <= int(choice) <= len(groups):
                failed += install(groups[int(choice) - 1][1], config, spooler)
                post_install_msg(config)

            else:
                print('Invalid choice.')
                continue

            print('Return to menu? [y/N]: ', end='', flush=True)
            if read().strip().lower() not in ('y', 'yes'):
                break

        except EOFError:
            break

    print('Done.')
    return failed


def load_printers_set(path=None):
    if path is not None:
        return load_module(path)

    if os.path.exists(DEFAULT_PS_NAME):
        return load_module(DEFAULT_PS_NAME)

    from smbpi import ps_sample
    return ps_sample


def make_parser():
    parser = argparse.ArgumentParser(prog='smbpi', description='Register SMB shared printers with the local spooler.')
    parser.add_argument('ps', nargs='?', help='printers set file (defaults to ./{} or the bundled sample)'.format(
        DEFAULT_PS_NAME))
    parser.add_argument('--prompt-now', action='store_true', default=None,
                        help='send a probe job after install to trigger the auth prompt immediately')
    parser.add_argument('--username', help='prefill the username of the auth prompt')
    parser.add_argument('--server', help='override the print server of every printer')
    parser.add_argument('--probe', action='store_true', default=None,
                        help='only set driver options the installed driver exposes')
    parser.add_argument('--all', action='store_true', help='install every printer without the menu')
    parser.add_argument('--remove', nargs='?', const='', default=None, metavar='PREFIX',
                        help='remove every queue starting with PREFIX and exit')
    parser.add_argument('--no-sudo', dest='sudo', action='store_false', default=None,
                        help='do not validate and keep sudo alive')
    parser.add_argument('--logs-dir', help='directory for the log file')
    parser.add_argument('--version', action='version', version='%(prog)s ' + version.__version__)
    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)

    try:
        module_ = load_printers_set(args.ps)
    except (OSError, SmbpiError) as e:
        print('Error: cannot load printers set: {}'.format(e), file=sys.stderr)
        return 2

    config = supply_config(module_,
                           server=args.server,
                           prompt_now=args.prompt_now,
                           username=args.username,
                           probe=args.probe,
                           remove_prefix=args.remove or None,
                           logs_dir=args.logs_dir,
                           sudo=args.sudo)

    smbpi.log.set_file_handler(os.path.join(config.logs_dir, smbpi.log.log_filename()))
    smbpi.log.set_stream_handler()

    log_sys_info(logger)

    try:
        check_tools()
    except MissingToolError as e:
        logger.error(str(e))
        print('Error: {}'.format(e), file=sys.stderr)
        return 1

    try:
        with SudoKeepalive(enabled=config.sudo):
            spooler = make_spooler(config)

            if args.remove is not None:
                remove(config.remove_prefix, spooler)
                return 0

            if args.all or not getattr(module_, 'groups', None):
                failed = install(module_.printers, config, spooler)
                post_install_msg(config)
            else:
                failed = interactive_loop(module_, config, spooler)

    except SmbpiError as e:
        logger.error(str(e))
        print('Error: {}'.format(e), file=sys.stderr)
        return 1

    if failed:
        print('Failed: {}'.format(', '.join(failed)), file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
