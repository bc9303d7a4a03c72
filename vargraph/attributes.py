"""
ordered, string keyed attribute container used for the free text ``info`` and ``evidence`` maps
"""
from collections.abc import Mapping


class Attributes(Mapping):
    """
    read only mapping of attribute names to a tuple of string values. Keys keep the order they were first given in

    Example:
        >>> info = Attributes({'source': 'dbSNP', 'tags': ['a', 'b']})
        >>> info['source']
        ('dbSNP',)
        >>> list(info)
        ['source', 'tags']
    """

    def __init__(self, data=None, **kwargs):
        items = {}
        source = []
        if data is not None:
            source.extend(data.items() if hasattr(data, 'items') else data)
        source.extend(kwargs.items())
        for key, value in source:
            if not isinstance(key, str):
                raise TypeError('attribute keys must be strings', key)
            items.setdefault(key, [])
            if isinstance(value, (list, tuple)):
                items[key].extend([str(v) for v in value])
            else:
                items[key].append(str(value))
        self._items = {k: tuple(v) for k, v in items.items()}

    def __getitem__(self, key):
        return self._items[key]

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __hash__(self):
        return hash(tuple(self._items.items()))

    def __eq__(self, other):
        if isinstance(other, Attributes):
            return list(self._items.items()) == list(other._items.items())
        return Mapping.__eq__(self, other)

    def __repr__(self):
        return 'Attributes({})'.format(', '.join(['{}={}'.format(k, list(v)) for k, v in self._items.items()]))

    def first(self, key, default=None):
        """
        the first value given for an attribute
        """
        values = self._items.get(key)
        if not values:
            return default
        return values[0]

    def update(self, data=None, **kwargs):
        """
        Returns:
            Attributes: a new container with the values of the input appended to the current values
        """
        combined = self.to_dict()
        for key, values in Attributes(data, **kwargs).items():
            combined.setdefault(key, []).extend(values)
        return Attributes(combined)

    def to_dict(self):
        return {k: list(v) for k, v in self._items.items()}
