"""
maps the address of a side of a base to its canonical context by walking the join chains of the graph
"""
import networkx as nx

from .config import GRAPH_OPTIONS
from .constants import SIDE
from .error import AmbiguousContext, NonAbutting, NotFound, OutOfBounds
from .location import CanonicalContext, JoinLocation
from .util import DEVNULL


def tie_break_key(location):
    """
    ordering used to pick a single canonical address among equally valid candidates. Prefers the PLUS side, then the
    lexicographically smallest variant id, then the smallest position

    Example:
        >>> locations = [JoinLocation('b', 2, '-'), JoinLocation('b', 1, '+'), JoinLocation('a', 9, '-')]
        >>> sorted(locations, key=tie_break_key)
        [JoinLocation(b:1+), JoinLocation(a:9-), JoinLocation(b:2-)]
    """
    return (0 if location.side == SIDE.PLUS else 1, location.variant_id, location.position)


class ContextResolver:
    """
    resolves addresses against an immutable snapshot of a variant store

    Example:
        >>> resolver = ContextResolver(store)
        >>> resolver.resolve('ins1', 0, SIDE.MINUS)
        CanonicalContext(ref:3+)
    """

    def __init__(self, store, max_join_depth=None, log=DEVNULL):
        """
        Args:
            store (GraphSnapshot): the store (or a snapshot of it) to resolve against
            max_join_depth (int): the maximum number of joins to follow. Defaults to the graph options value
            log (Log): logging function
        """
        self.graph = store.snapshot()
        self.max_join_depth = max_join_depth if max_join_depth is not None else GRAPH_OPTIONS.max_join_depth
        self.log = log
        self._side_graph = None

    def variant(self, variant_id):
        return self.graph.get(variant_id)

    def check(self, location):
        """
        check that the address exists in the graph

        Raises:
            NotFound: the variant does not exist
            OutOfBounds: the position is not a base of the variant
        """
        variant = self.graph.get(location.variant_id)
        if location.position >= len(variant):
            raise OutOfBounds(
                'position is outside of the variant sequence', location, len(variant))
        return variant

    def is_boundary(self, location):
        """
        Returns:
            bool: True if the address is the side of a non-root variant attached to one of its joins
        """
        variant = self.check(location)
        if self.graph.is_root(variant.id):
            return False
        if location.position == 0 and location.side == SIDE.MINUS:
            return True
        return location.position == len(variant) - 1 and location.side == SIDE.PLUS

    def follow(self, location):
        """
        Returns:
            JoinLocation: the address that a boundary address is joined to
        """
        variant = self.check(location)
        if location.position == 0 and location.side == SIDE.MINUS:
            return variant.start_join
        return variant.end_join

    def twin(self, location):
        """
        the other name of the junction between two consecutive bases of the same variant

        Example:
            >>> resolver.twin(JoinLocation('ref', 3, '+'))
            JoinLocation(ref:4-)
        """
        variant = self.check(location)
        if location.side == SIDE.PLUS and location.position + 1 < len(variant):
            return JoinLocation(variant.id, location.position + 1, SIDE.MINUS)
        elif location.side == SIDE.MINUS and location.position > 0:
            return JoinLocation(variant.id, location.position - 1, SIDE.PLUS)
        return None

    def resolve(self, variant_id, position=None, side=None):
        """
        map an address to its canonical context. An address strictly inside a variant resolves to itself. Once a
        join has been crossed the address reached and its twin junction name are both candidates and the tie-break
        picks between them

        Args:
            variant_id (str|JoinLocation): the variant id or the full address
            position (int): the 0-based position of the base
            side (SIDE): the side of the base

        Returns:
            CanonicalContext: the canonical address with the path of addresses walked to reach it

        Raises:
            NotFound: the address (or a join on the walk) references a variant that does not exist
            OutOfBounds: the address (or a join on the walk) is outside of the variant sequence
            AmbiguousContext: the walk revisits an address or exceeds the maximum join depth
        """
        if isinstance(variant_id, JoinLocation):
            start = variant_id.location()
        else:
            start = JoinLocation(variant_id, position, side)
        self.check(start)
        path = [start]
        visited = {start}
        current = start

        while self.is_boundary(current):
            if self.max_join_depth is not None and len(path) > self.max_join_depth:
                raise AmbiguousContext('exceeded the maximum join depth', start, self.max_join_depth, path)
            current = self.follow(current)
            if current in visited:
                raise AmbiguousContext('join chain revisits an address', start, path + [current])
            try:
                self.check(current)
            except NotFound:
                raise NotFound('join on the resolution path references a missing variant', start, current)
            visited.add(current)
            path.append(current)

        candidates = [current]
        twin = self.twin(current)
        if twin is not None and len(path) > 1:
            candidates.append(twin)
        best = min(candidates, key=tie_break_key)
        self.log('resolved', start, 'to', best, 'after', len(path) - 1, 'join(s)')
        return CanonicalContext(best.variant_id, best.position, best.side, path=path)

    def side_graph(self):
        """
        Returns:
            networkx.Graph: the join adjacencies between sides of bases. Each edge has the id of the variant that
            contributes it
        """
        if self._side_graph is not None:
            return self._side_graph
        graph = nx.Graph()
        for variant in self.graph:
            if self.graph.is_root(variant.id):
                continue
            if not variant.sequence:
                graph.add_edge(variant.start_join, variant.end_join, variant=variant.id)
                continue
            first = JoinLocation(variant.id, 0, SIDE.MINUS)
            last = JoinLocation(variant.id, len(variant) - 1, SIDE.PLUS)
            graph.add_edge(first, variant.start_join, variant=variant.id)
            graph.add_edge(last, variant.end_join, variant=variant.id)
        self._side_graph = graph
        return graph

    def neighbours(self, location):
        """
        Returns:
            list of JoinLocation: all sides adjacent to the given side
        """
        location = location.location()
        self.check(location)
        result = []
        twin = self.twin(location)
        if twin is not None:
            result.append(twin)
        graph = self.side_graph()
        if graph.has_node(location):
            result.extend(sorted(graph.neighbors(location)))
        return result

    def adjacent(self, first, second):
        """
        checks if two sides are directly connected, either as consecutive bases of the same variant, by the join of a
        variant or through a zero length variant

        Returns:
            bool: True if the sides are adjacent
        """
        first = first.location()
        second = second.location()
        self.check(first)
        self.check(second)
        if self.twin(first) == second:
            return True
        return self.side_graph().has_edge(first, second)

    def bridge(self, first, second):
        """
        Returns:
            str: the id of the variant contributing the adjacency between two sides (None for consecutive bases)
        """
        first = first.location()
        second = second.location()
        if not self.adjacent(first, second):
            raise NonAbutting('sides are not adjacent', first, second)
        if self.twin(first) == second:
            return None
        return self.side_graph().get_edge_data(first, second)['variant']

    def junction(self, first, second):
        """
        the canonical context of the junction between two adjacent sides. Both sides are resolved and the tie-break
        picks one, so the result does not depend on the order the sides are given in

        Example:
            >>> resolver.junction(JoinLocation('ref', 5, '+'), JoinLocation('ref', 8, '-'))
            CanonicalContext(ref:5+)

        Raises:
            NonAbutting: the sides are not adjacent
        """
        if not self.adjacent(first, second):
            raise NonAbutting('sides are not adjacent', first.location(), second.location())
        return min([self.resolve(first), self.resolve(second)], key=tie_break_key)


def resolve(store, variant_id, position=None, side=None):
    """
    resolve a single address. See :meth:`ContextResolver.resolve`
    """
    return ContextResolver(store).resolve(variant_id, position, side)
