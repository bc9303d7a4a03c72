from .constants import SIDE


class JoinLocation:
    """
    class for storing the address of one side of a base in the graph.
    positions are given as 0-indexed offsets into the sequence of the referenced variant
    """
    __slots__ = ('variant_id', 'position', 'side')

    @property
    def key(self):
        return (self.variant_id, self.position, self.side)

    def __init__(self, variant_id, position, side=SIDE.PLUS):
        """
        Args:
            variant_id (str): the id of the variant this location is on
            position (int): the 0-based position of the base
            side (SIDE): the side of the base

        Examples:
            >>> JoinLocation('ref', 10)
            >>> JoinLocation('ref', 10, SIDE.MINUS)
        """
        if not isinstance(variant_id, str) or not variant_id:
            raise TypeError('variant_id must be a non-empty string', variant_id)
        if isinstance(position, bool) or int(position) != position:
            raise TypeError('position must be an integer', position)
        if position < 0:
            raise ValueError('position cannot be negative', position)
        object.__setattr__(self, 'variant_id', variant_id)
        object.__setattr__(self, 'position', int(position))
        object.__setattr__(self, 'side', SIDE.enforce(side))

    def __setattr__(self, attr, value):
        raise AttributeError('locations are immutable', attr)

    def __repr__(self):
        return '{}({}:{}{})'.format(self.__class__.__name__, self.variant_id, self.position, self.side)

    def __eq__(self, other):
        if not isinstance(other, JoinLocation):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __lt__(self, other):
        return self.key < other.key

    def __iter__(self):
        return iter(self.key)

    def to_dict(self):
        return {
            'variant_id': self.variant_id,
            'position': self.position,
            'side': self.side
        }

    @classmethod
    def from_dict(cls, data):
        return cls(data['variant_id'], data['position'], data['side'])

    def location(self):
        """
        Returns:
            JoinLocation: a plain location with the same address
        """
        return JoinLocation(*self.key)


class CanonicalContext(JoinLocation):
    """
    the disambiguated address of a side of a base. Compares equal to any location with the same address.
    The path holds the addresses walked (in order) to reach the canonical address
    """
    __slots__ = ('path',)

    def __init__(self, variant_id, position, side, path=()):
        JoinLocation.__init__(self, variant_id, position, side)
        object.__setattr__(self, 'path', tuple(path))

    def __hash__(self):
        return hash(self.key)

    def __eq__(self, other):
        return JoinLocation.__eq__(self, other)

    @property
    def joins_followed(self):
        """:class:`int`: the number of joins that were crossed to reach this context"""
        return max(0, len(self.path) - 1)
