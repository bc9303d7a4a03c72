"""
building alleles from segments and deciding when two alleles are the same allele
"""
from collections import namedtuple

from .config import GRAPH_OPTIONS
from .constants import SIDE, flip_side, reverse_complement
from .error import InvalidSegment, NonAbutting, NotMaximal, NotSpecifiedError
from .location import JoinLocation
from .resolve import ContextResolver
from .util import DEVNULL
from .variant import Allele, Segment


class BoundSegment(namedtuple('BoundSegment', ['segment', 'variant', 'lo', 'hi'])):
    """
    a segment with its positions checked against the variant it is a part of

    Attributes:
        segment (Segment): the input segment
        variant (Variant): the variant the segment is on
        lo (int): the first covered position (inclusive)
        hi (int): the last covered position (exclusive)
    """

    @property
    def forwards(self):
        return self.segment.side == SIDE.PLUS

    @property
    def first(self):
        """:class:`int`: position of the first base in the direction of travel"""
        return self.lo if self.forwards else self.hi - 1

    @property
    def last(self):
        """:class:`int`: position of the last base in the direction of travel"""
        return self.hi - 1 if self.forwards else self.lo

    @property
    def entry(self):
        """:class:`JoinLocation`: the side of the first base the segment is entered through"""
        return JoinLocation(self.variant.id, self.first, flip_side(self.segment.side))

    @property
    def exit(self):
        """:class:`JoinLocation`: the side of the last base the segment is exited through"""
        return JoinLocation(self.variant.id, self.last, self.segment.side)

    @property
    def explicit(self):
        """:class:`Segment`: the segment with positions expanded when given as the whole variant"""
        return self.segment.explicit(len(self.variant))

    def sequence(self):
        seq = self.variant.sequence[self.lo:self.hi]
        if self.forwards:
            return seq
        return reverse_complement(seq)


def bind_segment(store, segment):
    """
    Raises:
        NotFound: the segment variant does not exist
        OutOfBounds: the segment extends past the end of the variant
        LengthMismatch: a whole variant segment gives a length which is not the variant length
        InvalidSegment: the segment does not cover any bases
    """
    if not isinstance(segment, Segment):
        raise TypeError('expected a Segment', segment)
    variant = store.get(segment.variant_id)
    lo, hi = segment.bounds(len(variant))
    if lo == hi:
        raise InvalidSegment('segment does not cover any bases', segment)
    return BoundSegment(segment, variant, lo, hi)


def could_merge(first, second):
    """
    checks if two consecutive bound segments could be expressed as a single segment

    Returns:
        bool: True if the segments are on the same variant and side and are contiguous
    """
    if first.variant.id != second.variant.id or first.segment.side != second.segment.side:
        return False
    if first.explicit.end == second.explicit.start:
        return True
    if first.forwards:
        return first.hi == second.lo
    return first.lo == second.hi


class AlleleBuilder:
    """
    assembles segments into alleles, checking that the segments are abutting and maximal

    Example:
        >>> builder = AlleleBuilder(store)
        >>> builder.build([Segment('ref', 0, 4), Segment('ins1'), Segment('ref', 4, 8)])
    """

    def __init__(self, store, resolver=None, log=DEVNULL):
        self.graph = store.snapshot()
        self.resolver = resolver if resolver is not None else ContextResolver(self.graph, log=log)
        self.log = log

    def bind(self, segments):
        return [bind_segment(self.graph, s) for s in segments]

    def check_pair(self, first, second):
        """
        Args:
            first (BoundSegment): the preceding segment
            second (BoundSegment): the following segment

        Returns:
            tuple of CanonicalContext: the end context of the first segment and the predecessor context of the second.
            Both are the context of the junction between them

        Raises:
            NotMaximal: the segments could be a single segment
            NonAbutting: the last base of the first segment is not adjacent to the first base of the second
        """
        if could_merge(first, second):
            raise NotMaximal(
                'consecutive segments could be expressed as a single segment', first.segment, second.segment)
        if not self.resolver.adjacent(first.exit, second.entry):
            raise NonAbutting(
                'segments do not abut', first.segment, second.segment,
                self.resolver.resolve(first.exit), self.resolver.resolve(second.entry))
        exit_context = self.resolver.junction(first.exit, second.entry)
        entry_context = self.resolver.junction(second.entry, first.exit)
        return exit_context, entry_context

    def build(self, segments, allele_id=None):
        """
        Args:
            segments (list of Segment): the ordered segments of the allele
            allele_id (str): the id to give the allele. One is generated if not given

        Returns:
            Allele: the new allele

        Raises:
            InvalidSegment: no segments were given
            NonAbutting: two consecutive segments are not adjacent in the graph
            NotMaximal: two consecutive segments could be a single segment
        """
        segments = list(segments)
        if not segments:
            raise InvalidSegment('an allele requires at least one segment')
        bound = self.bind(segments)
        for first, second in zip(bound, bound[1:]):
            self.check_pair(first, second)
        allele = Allele(segments, id=allele_id)
        self.log('built', allele)
        return allele

    def sequence(self, allele):
        """
        Returns:
            str: the bases spelled out by the allele. Reverse segments contribute their reverse complement
        """
        return ''.join([b.sequence() for b in self.bind(allele.segments)])


class AlleleMerger:
    """
    decides whether two alleles are the same allele. This is identity only, overlapping alleles are never combined
    """

    def __init__(self, store, global_ids=None, compatibility=None, resolver=None, log=DEVNULL):
        """
        Args:
            store (GraphSnapshot): the store the alleles reference
            global_ids (bool): allele ids are drawn from a shared naming space. Defaults to the graph options value
            compatibility (callable): function of (allele, allele, context) answering if the alleles can coexist on
                the same haplotype
            resolver (ContextResolver): resolver to canonicalize segment addresses with
        """
        self.graph = store.snapshot()
        self.resolver = resolver if resolver is not None else ContextResolver(self.graph, log=log)
        self.global_ids = GRAPH_OPTIONS.global_allele_ids if global_ids is None else global_ids
        self.compatibility = compatibility
        self.log = log
        self._signatures = {}

    def signature(self, allele):
        """
        the canonical form of an allele. Whole variant segments are expanded and the entry and exit sides of each
        segment are replaced with their canonical contexts

        Returns:
            tuple: one (variant id, entry context, exit context, side, length) tuple per segment
        """
        if allele in self._signatures:
            return self._signatures[allele]
        result = []
        for bound in [bind_segment(self.graph, s) for s in allele.segments]:
            result.append((
                bound.variant.id,
                self.resolver.resolve(bound.entry).key,
                self.resolver.resolve(bound.exit).key,
                bound.segment.side,
                bound.hi - bound.lo
            ))
        result = tuple(result)
        self._signatures[allele] = result
        return result

    def same_allele(self, first, second):
        """
        Returns:
            bool: True if the alleles share an id in the global naming space or have identical canonical segments
        """
        if self.global_ids and first.id == second.id:
            return True
        return self.signature(first) == self.signature(second)

    def merge(self, alleles):
        """
        collapse a list of alleles to one representative per allele identity

        Returns:
            list of Allele: the first seen allele of each identity, in input order
        """
        result = []
        for allele in alleles:
            if any([self.same_allele(allele, kept) for kept in result]):
                self.log('merged duplicate allele', allele.id)
                continue
            result.append(allele)
        return result

    def compatible(self, first, second, context=None):
        """
        can the two alleles coexist on the same haplotype. Delegates to the compatibility function given on creation

        Raises:
            NotSpecifiedError: no compatibility function was given
        """
        if self.compatibility is None:
            raise NotSpecifiedError('allele compatibility requires a compatibility function')
        return self.compatibility(first, second, context)


def same_allele(store, first, second, global_ids=None):
    return AlleleMerger(store, global_ids=global_ids).same_allele(first, second)
