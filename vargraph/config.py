import argparse
import logging

from .constants import GraphNamespace, cast_boolean


class WeakGraphNamespace(GraphNamespace):

    def is_env_overwritable(self, attr):
        return True


def nullable_int(value):
    """
    Example:
        >>> nullable_int('none')
        >>> nullable_int('4')
        4
    """
    if value is None or str(value).lower() in ['none', 'null', '']:
        return None
    value = int(value)
    if value < 0:
        raise argparse.ArgumentTypeError('must be a non-negative integer', value)
    return value


GRAPH_OPTIONS = WeakGraphNamespace()
GRAPH_OPTIONS.add(
    'max_join_depth', None, cast_type=nullable_int, nullable=True,
    defn='maximum number of joins to follow when resolving the context of an address. None for no limit '
    '(the walk still stops when an address is revisited)'
)
GRAPH_OPTIONS.add(
    'global_allele_ids', True, cast_type=cast_boolean,
    defn='allele ids are drawn from a single shared naming space. Alleles with equal ids are the same allele'
)
GRAPH_OPTIONS.add(
    'validation_log_interval', 1000, cast_type=int,
    defn='number of variants to check between progress messages during graph validation'
)


class CustomHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    subclass the default help formatter to stop default printing for required arguments
    """

    def _get_help_string(self, action):
        if action.required:
            return action.help
        return super(CustomHelpFormatter, self)._get_help_string(action)

    def add_arguments(self, actions):
        # sort the arguments alphanumerically so they print in the help that way
        actions = sorted(actions, key=lambda x: getattr(x, 'option_strings'))
        super(CustomHelpFormatter, self).add_arguments(actions)


def get_metavar(arg_type):
    """
    For a given argument type, returns the string to be used for the metavar argument in add_argument

    Example:
        >>> get_metavar(cast_boolean)
        '{True,False}'
    """
    if arg_type in [bool, cast_boolean]:
        return '{True,False}'
    elif arg_type == float:
        return 'FLOAT'
    elif arg_type in [int, nullable_int]:
        return 'INT'
    return None


def augment_parser(arguments, parser, namespace=GRAPH_OPTIONS):
    """
    Add options to an argument parser. Graph options are added with their definitions and current values as defaults

    Args:
        arguments (list of str): the names of the arguments to add
        parser (argparse.ArgumentParser): the parser (or argument group) to add to
    """
    for arg in arguments:
        if arg == 'log':
            parser.add_argument('--log', help='redirect stdout to a log file', default=None)
        elif arg == 'log_level':
            parser.add_argument(
                '--log_level', help='level of logging to output', choices=['INFO', 'DEBUG'], default='INFO')
        elif arg in namespace:
            cast_type = namespace.type(arg)
            parser.add_argument(
                '--{}'.format(arg),
                default=namespace[arg],
                type=cast_type,
                metavar=get_metavar(cast_type),
                help=namespace.define(arg, None)
            )
        else:
            raise KeyError('invalid argument', arg)


def log_level(name):
    """
    Example:
        >>> log_level('DEBUG') == logging.DEBUG
        True
    """
    return getattr(logging, str(name).upper())


def update_options(args, namespace=GRAPH_OPTIONS):
    """
    copy values of graph options given on the command line back onto the options namespace
    """
    for attr in namespace.keys():
        if hasattr(args, attr):
            namespace[attr] = getattr(args, attr)
