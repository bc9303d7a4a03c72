"""
records making up the variation graph. All records are immutable once constructed
"""
from .attributes import Attributes
from .constants import CALLSET_TYPE, ROOT_POSITION, SIDE
from .error import InvalidSegment, LengthMismatch, OutOfBounds
from .location import JoinLocation
from .util import generate_id


class _Record:
    """
    base for immutable records. subclasses set attributes through _set during __init__
    """
    __slots__ = ()

    def _set(self, attr, value):
        object.__setattr__(self, attr, value)

    def __setattr__(self, attr, value):
        raise AttributeError('{} records are immutable'.format(self.__class__.__name__), attr)

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)


class Variant(_Record):
    """
    a piece of sequence joined into the graph at two defined locations
    """
    __slots__ = ('id', 'start_join', 'end_join', 'sequence', 'info')

    @property
    def key(self):
        return (self.id, self.start_join, self.end_join, self.sequence, self.info)

    def __init__(self, id, start_join, end_join, sequence='', info=None):
        """
        Args:
            id (str): the unique id of the variant
            start_join (JoinLocation): the side the first base of this variant is joined to
            end_join (JoinLocation): the side the last base of this variant is joined to
            sequence (str): the bases of this variant
            info (dict): additional attributes

        Example:
            >>> Variant('ref', JoinLocation('ref', 0), JoinLocation('ref', 0), 'ACGTACGT')
            >>> Variant('ins1', JoinLocation('ref', 3, '+'), JoinLocation('ref', 4, '-'), 'TTT')
        """
        if not isinstance(id, str) or not id:
            raise TypeError('variant id must be a non-empty string', id)
        for join in [start_join, end_join]:
            if not isinstance(join, JoinLocation):
                raise TypeError('joins must be JoinLocation objects', join)
        self._set('id', id)
        self._set('start_join', start_join.location())
        self._set('end_join', end_join.location())
        self._set('sequence', str(sequence))
        self._set('info', info if isinstance(info, Attributes) else Attributes(info))

    @classmethod
    def root(cls, id, sequence, info=None):
        """
        create a primary sequence variant. Both joins reference the start of the variant itself
        """
        anchor = JoinLocation(id, ROOT_POSITION, SIDE.PLUS)
        return cls(id, anchor, anchor, sequence, info=info)

    @property
    def is_root(self):
        anchor = (self.id, ROOT_POSITION, SIDE.PLUS)
        return self.start_join.key == anchor and self.end_join.key == anchor

    def __len__(self):
        return len(self.sequence)

    def __repr__(self):
        if self.is_root:
            return 'Variant({}, root, len={})'.format(self.id, len(self))
        return 'Variant({}, {}, {}, len={})'.format(self.id, self.start_join, self.end_join, len(self))

    def joins(self):
        return (self.start_join, self.end_join)

    def to_dict(self):
        return {
            'id': self.id,
            'start_join': self.start_join.to_dict(),
            'end_join': self.end_join.to_dict(),
            'sequence': self.sequence,
            'info': self.info.to_dict()
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            data['id'],
            JoinLocation.from_dict(data['start_join']),
            JoinLocation.from_dict(data['end_join']),
            data.get('sequence', ''),
            info=data.get('info')
        )


class Segment(_Record):
    """
    a contiguous sub-range of the sequence of a single variant read in a given direction

    the covered positions are the half-open range from the smaller to the larger of start and end.
    A segment with start and end both 0 denotes the whole variant
    """
    __slots__ = ('variant_id', 'start', 'end', 'side', 'length')

    @property
    def key(self):
        return (self.variant_id, self.start, self.end, self.side, self.length)

    def __init__(self, variant_id, start=0, end=0, side=SIDE.PLUS, length=None):
        """
        Args:
            variant_id (str): the variant this segment is a part of
            start (int): the start position (0-based)
            end (int): the end position (0-based, exclusive)
            side (SIDE): PLUS to read the range forwards, MINUS to read its reverse complement
            length (int): optional alternative to end. must agree with start and end when both are given

        Raises:
            InvalidSegment: the positions are negative or start equals end for a partial segment
            LengthMismatch: the length disagrees with the start and end positions

        Example:
            >>> Segment('ref', 0, 5)
            >>> Segment('ins1')  # the whole variant
            >>> Segment('ref', 2, 8, SIDE.MINUS, length=6)
        """
        if not isinstance(variant_id, str) or not variant_id:
            raise TypeError('variant_id must be a non-empty string', variant_id)
        for value in [start, end]:
            if isinstance(value, bool) or int(value) != value:
                raise InvalidSegment('segment positions must be integers', start, end)
            if value < 0:
                raise InvalidSegment('segment positions cannot be negative', start, end)
        start, end = int(start), int(end)
        if length is not None:
            if isinstance(length, bool) or int(length) != length or length < 0:
                raise LengthMismatch('segment length must be a non-negative integer', length)
            length = int(length)
        if start == end and start != 0:
            raise InvalidSegment('start and end can only be equal for whole variant (0, 0) segments', start, end)
        if not (start == 0 and end == 0) and length is not None and length != abs(end - start):
            raise LengthMismatch(
                'segment length does not agree with the start and end positions', variant_id, start, end, length)
        self._set('variant_id', variant_id)
        self._set('start', start)
        self._set('end', end)
        self._set('side', SIDE.enforce(side))
        self._set('length', length if length is not None or self.is_whole else abs(end - start))

    @property
    def is_whole(self):
        """:class:`bool`: True if the segment denotes the whole variant"""
        return self.start == 0 and self.end == 0

    def bounds(self, variant_length=None):
        """
        the covered half-open range as an ascending (lo, hi) tuple

        Args:
            variant_length (int): the length of the variant, required to expand whole variant segments

        Raises:
            OutOfBounds: the range extends past the end of the variant
        """
        if self.is_whole:
            if variant_length is None:
                raise ValueError('variant length is required to compute the bounds of a whole variant segment')
            if self.length is not None and self.length != variant_length:
                raise LengthMismatch(
                    'whole variant segment length does not match the variant', self.variant_id,
                    self.length, variant_length)
            return (0, variant_length)
        lo, hi = sorted([self.start, self.end])
        if variant_length is not None and hi > variant_length:
            raise OutOfBounds('segment extends past the end of the variant', self, variant_length)
        return (lo, hi)

    def explicit(self, variant_length):
        """
        Returns:
            Segment: an equivalent segment with the whole variant shorthand expanded to explicit positions
        """
        lo, hi = self.bounds(variant_length)
        if not self.is_whole:
            return self
        if self.side == SIDE.MINUS:
            return Segment(self.variant_id, hi, lo, self.side)
        return Segment(self.variant_id, lo, hi, self.side)

    def __len__(self):
        if self.length is None:
            raise TypeError('length of a whole variant segment is unknown until it is bound to a variant')
        return self.length

    def __repr__(self):
        if self.is_whole:
            return 'Segment({}{})'.format(self.variant_id, self.side)
        return 'Segment({}:{}-{}{})'.format(self.variant_id, self.start, self.end, self.side)

    def to_dict(self):
        row = {
            'variant_id': self.variant_id,
            'start': self.start,
            'end': self.end,
            'side': self.side
        }
        if self.length is not None:
            row['length'] = self.length
        return row

    @classmethod
    def from_dict(cls, data):
        return cls(
            data['variant_id'],
            data.get('start', 0),
            data.get('end', 0),
            data.get('side', SIDE.PLUS),
            length=data.get('length')
        )


class Allele(_Record):
    """
    an ordered, maximal and abutting chain of segments representing one path through the graph

    Note:
        use :class:`~vargraph.allele.AlleleBuilder` to create alleles that are checked against a graph
    """
    __slots__ = ('id', 'segments')

    @property
    def key(self):
        return (self.id, self.segments)

    def __init__(self, segments, id=None):
        segments = tuple(segments)
        for seg in segments:
            if not isinstance(seg, Segment):
                raise TypeError('allele sequences must be made of Segment objects', seg)
        self._set('id', id if id is not None else generate_id('allele'))
        self._set('segments', segments)

    def __iter__(self):
        return iter(self.segments)

    def __len__(self):
        return len(self.segments)

    def __repr__(self):
        return 'Allele({}, [{}])'.format(self.id, ', '.join([repr(s) for s in self.segments]))

    def variant_ids(self):
        return [s.variant_id for s in self.segments]

    def to_dict(self):
        return {'id': self.id, 'segments': [s.to_dict() for s in self.segments]}

    @classmethod
    def from_dict(cls, data):
        return cls([Segment.from_dict(s) for s in data['segments']], id=data['id'])


class CallSet(_Record):
    """
    a genotype or haplotype container of calls for a single sample
    """
    __slots__ = ('id', 'sample_id', 'callset_type', 'info')

    @property
    def key(self):
        return (self.id, self.sample_id, self.callset_type, self.info)

    def __init__(self, id, sample_id, callset_type=CALLSET_TYPE.GENOTYPE, info=None):
        if not isinstance(id, str) or not id:
            raise TypeError('callset id must be a non-empty string', id)
        self._set('id', id)
        self._set('sample_id', sample_id)
        self._set('callset_type', CALLSET_TYPE.enforce(callset_type))
        self._set('info', info if isinstance(info, Attributes) else Attributes(info))

    def __repr__(self):
        return 'CallSet({}, sample={}, {})'.format(self.id, self.sample_id, self.callset_type)

    def to_dict(self):
        return {
            'id': self.id,
            'sample_id': self.sample_id,
            'callset_type': self.callset_type,
            'info': self.info.to_dict()
        }

    @classmethod
    def from_dict(cls, data):
        return cls(data['id'], data.get('sample_id'), data.get('callset_type', CALLSET_TYPE.GENOTYPE), data.get('info'))


def _optional_count(name, value):
    if value is None:
        return None
    if isinstance(value, bool) or int(value) != value or value < 0:
        raise TypeError('{} must be a non-negative integer when given'.format(name), value)
    return int(value)


class Call(_Record):
    """
    evidence that a given allele is present in a given callset

    the statistical fields are carried without interpretation. copy_number, dosage and read_count are each
    independently present (a number, including 0) or absent (None)
    """
    OPTIONAL_FIELDS = ('copy_number', 'dosage', 'read_count')

    __slots__ = (
        'callset_id', 'allele_id', 'copy_number', 'dosage', 'probability', 'likelihood', 'read_count', 'evidence'
    )

    @property
    def key(self):
        return (
            self.callset_id, self.allele_id, self.copy_number, self.dosage, self.probability,
            self.likelihood, self.read_count, self.evidence
        )

    def __init__(
        self, callset_id, allele_id, copy_number=None, dosage=None, probability=None, likelihood=None,
        read_count=None, evidence=None
    ):
        self._set('callset_id', callset_id)
        self._set('allele_id', allele_id)
        self._set('copy_number', _optional_count('copy_number', copy_number))
        self._set('dosage', None if dosage is None else float(dosage))
        self._set('probability', tuple(float(p) for p in probability or []))
        self._set('likelihood', tuple(float(p) for p in likelihood or []))
        self._set('read_count', _optional_count('read_count', read_count))
        self._set('evidence', evidence if isinstance(evidence, Attributes) else Attributes(evidence))

    def has_statistics(self):
        """:class:`bool`: True if at least one of the optional statistics has been populated"""
        return any([getattr(self, f) is not None for f in self.OPTIONAL_FIELDS]) or bool(self.probability) \
            or bool(self.likelihood)

    def __repr__(self):
        return 'Call({}, {})'.format(self.callset_id, self.allele_id)

    def to_dict(self):
        row = {
            'callset_id': self.callset_id,
            'allele_id': self.allele_id,
            'probability': list(self.probability),
            'likelihood': list(self.likelihood),
            'evidence': self.evidence.to_dict()
        }
        for field in self.OPTIONAL_FIELDS:
            if getattr(self, field) is not None:
                row[field] = getattr(self, field)
        return row

    @classmethod
    def from_dict(cls, data):
        return cls(
            data['callset_id'],
            data['allele_id'],
            copy_number=data.get('copy_number'),
            dosage=data.get('dosage'),
            probability=data.get('probability'),
            likelihood=data.get('likelihood'),
            read_count=data.get('read_count'),
            evidence=data.get('evidence')
        )


class VariantScaffold(_Record):
    """
    an ordered and oriented set of alleles with the sizes of the gaps between them

    Note:
        use :func:`~vargraph.scaffold.assemble` to create scaffolds with the shape checked
    """
    __slots__ = ('id', 'alleles', 'is_forwards', 'gap_sizes')

    @property
    def key(self):
        return (self.id, self.alleles, self.is_forwards, self.gap_sizes)

    def __init__(self, id, alleles, is_forwards, gap_sizes):
        self._set('id', id)
        self._set('alleles', tuple(alleles))
        self._set('is_forwards', tuple(bool(f) for f in is_forwards))
        self._set('gap_sizes', tuple(int(g) for g in gap_sizes))

    def __len__(self):
        return len(self.alleles)

    def __repr__(self):
        return 'VariantScaffold({}, alleles={})'.format(self.id, list(self.alleles))

    def to_dict(self):
        return {
            'id': self.id,
            'alleles': list(self.alleles),
            'is_forwards': list(self.is_forwards),
            'gap_sizes': list(self.gap_sizes)
        }

    @classmethod
    def from_dict(cls, data):
        return cls(data['id'], data['alleles'], data['is_forwards'], data['gap_sizes'])
