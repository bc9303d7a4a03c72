from vargraph.constants import SIDE
from vargraph.location import JoinLocation
from vargraph.store import VariantStore

REFERENCE_SEQ = 'ACGTACGTAC'


def loc(variant_id, position, side=SIDE.PLUS):
    return JoinLocation(variant_id, position, side)


def build_example_graph(store=None):
    """
    a small graph over a 10bp reference

    - ins1: TTT inserted between ref[3] and ref[4]
    - del1: deletion of ref[6:8]
    - snp1: T replacing ref[2]
    - nested: AA inserted between ins1[0] and ins1[1]
    """
    if store is None:
        store = VariantStore()
    store.add_root('ref', REFERENCE_SEQ)
    store.add_sequence('ins1', 'TTT', loc('ref', 3, SIDE.PLUS), loc('ref', 4, SIDE.MINUS))
    store.add_sequence('del1', '', loc('ref', 5, SIDE.PLUS), loc('ref', 8, SIDE.MINUS))
    store.add_sequence('snp1', 'T', loc('ref', 1, SIDE.PLUS), loc('ref', 3, SIDE.MINUS))
    store.add_sequence('nested', 'AA', loc('ins1', 0, SIDE.PLUS), loc('ins1', 1, SIDE.MINUS))
    return store


def build_cycle_graph(with_root=True):
    """
    two single base variants joined only to each other. When a root is included it is not referenced by either
    """
    store = VariantStore()
    if with_root:
        store.add_root('ref', REFERENCE_SEQ)
    store.add_sequence('a', 'C', loc('b', 0, SIDE.MINUS), loc('b', 0, SIDE.PLUS))
    store.add_sequence('b', 'G', loc('a', 0, SIDE.MINUS), loc('a', 0, SIDE.PLUS))
    return store


class CancelAfter:
    """
    stand-in for a threading.Event which reports being set after it has been checked a number of times
    """

    def __init__(self, checks):
        self.checks = checks
        self.count = 0

    def is_set(self):
        self.count += 1
        return self.count > self.checks
