"""
the variant store owns every record in the graph. It is append only so that the identity of a base never changes
once it has been joined into the graph
"""
import threading
from types import MappingProxyType

from .constants import ROOT_POSITION, SIDE
from .error import DuplicateId, NotFound
from .util import DEVNULL
from .variant import Allele, Call, CallSet, Variant


class GraphSnapshot:
    """
    read only view of the store contents at a single point in time. Readers (the validator, resolver and
    allele builder) work against a snapshot so that they never observe a partially inserted record
    """

    def __init__(self, variants, alleles=None, callsets=None, calls=None):
        self.variants = MappingProxyType(dict(variants))
        self.alleles = MappingProxyType(dict(alleles or {}))
        self.callsets = MappingProxyType(dict(callsets or {}))
        self.calls = tuple(calls or [])

    def snapshot(self):
        return self

    def __contains__(self, variant_id):
        return variant_id in self.variants

    def __len__(self):
        return len(self.variants)

    def __iter__(self):
        return iter(self.variants.values())

    def get(self, variant_id):
        """
        Raises:
            NotFound: the variant id is not in the snapshot
        """
        try:
            return self.variants[variant_id]
        except KeyError:
            raise NotFound('variant does not exist', variant_id)

    get_variant = get

    def get_allele(self, allele_id):
        try:
            return self.alleles[allele_id]
        except KeyError:
            raise NotFound('allele does not exist', allele_id)

    def get_callset(self, callset_id):
        try:
            return self.callsets[callset_id]
        except KeyError:
            raise NotFound('callset does not exist', callset_id)

    def is_root(self, variant_id):
        """
        Returns:
            bool: True if both joins of the variant reference the start of the variant itself
        """
        variant = self.get(variant_id)
        anchor = (variant_id, ROOT_POSITION, SIDE.PLUS)
        return variant.start_join.key == anchor and variant.end_join.key == anchor

    def roots(self):
        return [v.id for v in self.variants.values() if self.is_root(v.id)]

    def calls_for(self, callset_id=None, allele_id=None):
        """
        Returns:
            list of Call: the calls matching the given callset and/or allele
        """
        return [
            c for c in self.calls
            if (callset_id is None or c.callset_id == callset_id) and (allele_id is None or c.allele_id == allele_id)
        ]


class VariantStore(GraphSnapshot):
    """
    the authoritative backing store of the graph. inserts are serialized through a store-wide lock and
    a record becomes visible with all of its fields or not at all

    Example:
        >>> store = VariantStore()
        >>> store.add_root('ref', 'ACGTACGT')
        >>> store.add_sequence('ins1', 'TT', JoinLocation('ref', 3, '+'), JoinLocation('ref', 4, '-'))
        >>> store.is_root('ref')
        True
    """

    def __init__(self, log=DEVNULL):
        self._lock = threading.RLock()
        self._variants = {}
        self._alleles = {}
        self._callsets = {}
        self._calls = []
        self.log = log

    @property
    def variants(self):
        return MappingProxyType(self._variants)

    @property
    def alleles(self):
        return MappingProxyType(self._alleles)

    @property
    def callsets(self):
        return MappingProxyType(self._callsets)

    @property
    def calls(self):
        return tuple(self._calls)

    def snapshot(self):
        """
        Returns:
            GraphSnapshot: an immutable copy of the current store contents
        """
        with self._lock:
            return GraphSnapshot(self._variants, self._alleles, self._callsets, self._calls)

    def insert_variant(self, variant):
        """
        Add a variant to the store

        Raises:
            DuplicateId: a variant with the same id already exists
        """
        if not isinstance(variant, Variant):
            raise TypeError('expected a Variant', variant)
        with self._lock:
            if variant.id in self._variants:
                raise DuplicateId('variant id already exists', variant.id)
            self._variants[variant.id] = variant
        self.log('inserted', variant)
        return variant

    insert = insert_variant

    def add_sequence(self, variant_id, sequence, start_join, end_join, info=None):
        """
        join a new sequence into the graph between two existing locations
        """
        return self.insert_variant(Variant(variant_id, start_join, end_join, sequence, info=info))

    def add_root(self, variant_id, sequence, info=None):
        """
        add a new primary sequence to the graph
        """
        return self.insert_variant(Variant.root(variant_id, sequence, info=info))

    def insert_allele(self, allele):
        if not isinstance(allele, Allele):
            raise TypeError('expected an Allele', allele)
        with self._lock:
            if allele.id in self._alleles:
                raise DuplicateId('allele id already exists', allele.id)
            for seg in allele.segments:
                if seg.variant_id not in self._variants:
                    raise NotFound('allele references a variant that does not exist', allele.id, seg.variant_id)
            self._alleles[allele.id] = allele
        return allele

    def insert_callset(self, callset):
        if not isinstance(callset, CallSet):
            raise TypeError('expected a CallSet', callset)
        with self._lock:
            if callset.id in self._callsets:
                raise DuplicateId('callset id already exists', callset.id)
            self._callsets[callset.id] = callset
        return callset

    def insert_call(self, call):
        """
        Raises:
            NotFound: the call references a callset or allele which has not been inserted
        """
        if not isinstance(call, Call):
            raise TypeError('expected a Call', call)
        with self._lock:
            if call.callset_id not in self._callsets:
                raise NotFound('call references a callset that does not exist', call.callset_id)
            if call.allele_id not in self._alleles:
                raise NotFound('call references an allele that does not exist', call.allele_id)
            self._calls.append(call)
        if not call.has_statistics():
            self.log('warning: call has none of the optional statistics populated', call)
        return call
