#!python
import argparse
import logging
import platform
import sys
import time

from . import __version__
from . import config as _config
from . import util as _util
from .allele import AlleleBuilder
from .constants import EXIT_ERROR, EXIT_OK, PROGNAME, SIDE, GraphNamespace
from .io import load_graph
from .resolve import ContextResolver
from .validate import validate

SUBCOMMAND = GraphNamespace(
    VALIDATE='validate',
    RESOLVE='resolve',
    SEQUENCE='sequence'
)


def run_validate(args):
    store, _ = load_graph(args.graph, log=_util.LOG)
    report = validate(store, log=_util.LOG)
    for violation in report:
        print(violation)
    return EXIT_OK if report.ok else EXIT_ERROR


def run_resolve(args):
    store, _ = load_graph(args.graph, log=_util.LOG)
    resolver = ContextResolver(store, max_join_depth=args.max_join_depth, log=_util.LOG.indent())
    context = resolver.resolve(args.variant_id, args.position, args.side)
    print('{}\t{}\t{}'.format(context.variant_id, context.position, context.side))
    return EXIT_OK


def run_sequence(args):
    store, _ = load_graph(args.graph, log=_util.LOG)
    builder = AlleleBuilder(store, log=_util.LOG.indent())
    for allele_id in args.alleles:
        allele = store.get_allele(allele_id)
        print('>{}'.format(allele.id))
        print(builder.sequence(allele))
    return EXIT_OK


def main(argv=None):
    """
    sets up the parser and checks the validity of command line args
    loads the graph file and redirects into subcommand functions

    Args:
        argv (list): List of arguments, defaults to command line arguments
    """
    if argv is None:  # need to do at run time or patching will not behave as expected
        argv = sys.argv[1:]
    start_time = int(time.time())

    parser = argparse.ArgumentParser(prog=PROGNAME, formatter_class=_config.CustomHelpFormatter)
    parser.add_argument('-v', '--version', action='version', version='%(prog)s version ' + __version__)
    subp = parser.add_subparsers(dest='command', help='specifies which query to run against the graph')
    subp.required = True
    required = {}  # hold required argument group by subparser command name
    optional = {}  # hold optional argument group by subparser command name
    for command in SUBCOMMAND.values():
        subparser = subp.add_parser(command, formatter_class=_config.CustomHelpFormatter)
        required[command] = subparser.add_argument_group('required arguments')
        optional[command] = subparser.add_argument_group('optional arguments')
        _config.augment_parser(['log', 'log_level'], optional[command])
        required[command].add_argument('graph', help='path to the graph json file')

    required[SUBCOMMAND.RESOLVE].add_argument('variant_id', help='the variant the address is on')
    required[SUBCOMMAND.RESOLVE].add_argument('position', type=int, help='the 0-based position of the base')
    required[SUBCOMMAND.RESOLVE].add_argument('side', choices=SIDE.values(), help='the side of the base')
    _config.augment_parser(['max_join_depth'], optional[SUBCOMMAND.RESOLVE])
    required[SUBCOMMAND.SEQUENCE].add_argument('alleles', nargs='+', help='ids of the alleles to spell out')

    args = parser.parse_args(argv)
    _config.update_options(args)

    log_conf = {'format': '{message}', 'style': '{', 'level': _config.log_level(args.log_level)}

    original_logging_handlers = logging.root.handlers[:]
    for handler in original_logging_handlers:
        logging.root.removeHandler(handler)
    if args.log:
        log_conf['filename'] = args.log
    logging.basicConfig(**log_conf)

    _util.LOG('vargraph: {}'.format(__version__))
    _util.LOG('hostname:', platform.node(), time_stamp=False)
    _util.log_arguments(args)

    commands = {
        SUBCOMMAND.VALIDATE: run_validate,
        SUBCOMMAND.RESOLVE: run_resolve,
        SUBCOMMAND.SEQUENCE: run_sequence
    }
    try:
        ret_val = commands[args.command](args)
        duration = int(time.time()) - start_time
        _util.LOG('run time (s): {}'.format(duration), time_stamp=False)
        return ret_val
    except Exception as err:
        if args.log:
            logging.exception(err)  # capture the error in the logging output file
        raise err
    finally:
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
            handler.close()
        for handler in original_logging_handlers:
            logging.root.addHandler(handler)


if __name__ == '__main__':
    sys.exit(main())
