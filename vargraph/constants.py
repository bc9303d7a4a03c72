"""
controlled vocabularies, the attribute namespace and small sequence helpers used throughout the vargraph package
"""
import os
import re

from Bio.Seq import Seq

PROGNAME = 'vargraph'
EXIT_OK = 0
EXIT_ERROR = 1


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class GraphNamespace:
    """
    holds a set of named values. Used both for the controlled vocabularies of the package and for the graph options,
    which carry a definition and a cast type and can be overridden by ``VARGRAPH_<NAME>`` environment variables

    Example:
        >>> nspace = GraphNamespace(PLUS='+', MINUS='-')
        >>> nspace.PLUS
        '+'
        >>> nspace['MINUS']
        '-'
    """
    ENV_PREFIX = 'VARGRAPH'

    def __init__(self, **kwargs):
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_nullable', set())
        object.__setattr__(self, '_env_overwritable', set())
        for attr, value in kwargs.items():
            self.add(attr, value)

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__, ', '.join(sorted(['{}={}'.format(k, repr(self[k])) for k in self])))

    def get_env_name(self, attr):
        """
        Example:
            >>> GraphNamespace().get_env_name('max_join_depth')
            'VARGRAPH_MAX_JOIN_DEPTH'
        """
        return '{}_{}'.format(self.ENV_PREFIX, attr).upper()

    def get_env_var(self, attr):
        """
        the value of an attribute given by its environment variable, cast to the type of the attribute

        Raises:
            KeyError: the environment variable is not set
        """
        env = os.environ[self.get_env_name(attr)].strip()
        if attr in self._nullable and env.lower() == 'none':
            return None
        return self._types.get(attr, str)(env)

    def is_env_overwritable(self, attr):
        return attr in self._env_overwritable

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError:
            members = object.__getattribute__(self, '_members')
            if attr not in members:
                raise
            if self.is_env_overwritable(attr):
                try:
                    return self.get_env_var(attr)
                except KeyError:
                    pass
            return members[attr]

    def __getitem__(self, key):
        return getattr(self, key)

    def __setitem__(self, key, val):
        self.__setattr__(key, val)

    def __setattr__(self, attr, val):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        self._members[attr] = val

    def __iter__(self):
        return iter(self.keys())

    def keys(self):
        return list(self._members)

    def values(self):
        return [self[k] for k in self._members]

    def enforce(self, value):
        """
        checks that the namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value is not a member

        Example:
            >>> SIDE.enforce('+')
            '+'
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def __call__(self, value):
        try:
            return self.enforce(value)
        except KeyError:
            raise TypeError('Invalid value {} for {}. Must be a valid member: {}'.format(
                repr(value), self.__class__.__name__, self.values()))

    def type(self, attr):
        """
        Returns:
            callable: the function used to cast environment and command line values of the attribute
        """
        return self._types[attr]

    def define(self, attr, *pos):
        """
        Get the definition of a given attribute or return a default (when given) if the attribute has none

        Raises:
            KeyError: the attribute has no definition and a default was not given
        """
        if attr in self._defns or not pos:
            return self._defns[attr]
        return pos[0]

    def add(self, attr, value, defn=None, cast_type=None, nullable=False, env_overwritable=False):
        """
        Add an attribute to the name space

        Args:
            attr (str): name of the attribute being added
            value: the value of the attribute
            defn (str): the definition, will be used in generating help menus
            cast_type (callable): the function to use in casting the value. Defaults to the type of the value
            nullable (bool): True if the attribute can be set to None from the environment
            env_overwritable (bool): True if the attribute is overridden by its environment variable
        """
        if attr in self._members:
            raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
        cast_type = cast_type or type(value)
        self._types[attr] = cast_boolean if cast_type == bool else cast_type
        if defn:
            self._defns[attr] = defn
        if nullable:
            self._nullable.add(attr)
        if env_overwritable:
            self._env_overwritable.add(attr)
        self[attr] = value


SIDE = GraphNamespace(PLUS='+', MINUS='-')
"""
holds controlled vocabulary for allowed side values

- ``PLUS``: the right (increasing coordinate) side of a base, or a segment read forwards
- ``MINUS``: the left side of a base, or a segment read as the reverse complement
"""

CALLSET_TYPE = GraphNamespace(GENOTYPE='GENOTYPE', HAPLOTYPE='HAPLOTYPE')
""":class:`GraphNamespace`: the kinds of call containers"""

VIOLATION = GraphNamespace(
    NOT_FOUND='NotFound',
    OUT_OF_BOUNDS='OutOfBounds',
    UNANCHORED_CYCLE='UnanchoredCycle',
    LENGTH_MISMATCH='LengthMismatch'
)
""":class:`GraphNamespace`: reasons reported by the graph validator"""

ROOT_POSITION = 0
""":class:`int`: the position both joins of a root variant point to"""


def flip_side(side):
    """
    Example:
        >>> flip_side(SIDE.PLUS)
        '-'
    """
    if SIDE.enforce(side) == SIDE.PLUS:
        return SIDE.MINUS
    return SIDE.PLUS


def reverse_complement(s):
    """
    wrapper for the Bio.Seq reverse_complement method

    Args:
        s (str): the input DNA sequence

    Returns:
        :class:`str`: the reverse complement of the input sequence

    Example:
        >>> reverse_complement('ATCCGGT')
        'ACCGGAT'
    """
    input_string = str(s)
    if not re.match('^[A-Za-z]*$', input_string):
        raise ValueError('unexpected sequence format. cannot reverse complement', input_string)
    return str(Seq(input_string).reverse_complement())
