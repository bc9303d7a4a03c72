"""
reading and writing graph records as plain dictionaries and json. Optional call statistics are omitted when absent
so that an absent value and an explicit 0 stay distinct
"""
import json

from .store import VariantStore
from .util import DEVNULL
from .variant import Allele, Call, CallSet, Segment, Variant, VariantScaffold

RECORD_TYPES = {
    cls.__name__: cls for cls in [Variant, Segment, Allele, CallSet, Call, VariantScaffold]
}


def to_dict(record):
    """
    Returns:
        dict: the record as a dictionary tagged with its record type
    """
    row = record.to_dict()
    row['type'] = record.__class__.__name__
    return row


def from_dict(data):
    """
    create a record from a dictionary produced by :func:`to_dict`

    Raises:
        KeyError: the record type is missing or unknown
    """
    data = dict(data)
    record_type = data.pop('type')
    try:
        cls = RECORD_TYPES[record_type]
    except KeyError:
        raise KeyError('unknown record type', record_type)
    return cls.from_dict(data)


def dumps(record, **kwargs):
    return json.dumps(to_dict(record), **kwargs)


def loads(string):
    return from_dict(json.loads(string))


def graph_to_dict(store, scaffolds=None):
    graph = store.snapshot()
    return {
        'variants': [v.to_dict() for v in graph],
        'alleles': [a.to_dict() for a in graph.alleles.values()],
        'callsets': [c.to_dict() for c in graph.callsets.values()],
        'calls': [c.to_dict() for c in graph.calls],
        'scaffolds': [s.to_dict() for s in scaffolds or []]
    }


def graph_from_dict(data, log=DEVNULL):
    """
    Returns:
        tuple of VariantStore and list of VariantScaffold: the populated store and any scaffolds
    """
    store = VariantStore(log=log)
    for row in data.get('variants', []):
        store.insert_variant(Variant.from_dict(row))
    for row in data.get('alleles', []):
        store.insert_allele(Allele.from_dict(row))
    for row in data.get('callsets', []):
        store.insert_callset(CallSet.from_dict(row))
    for row in data.get('calls', []):
        store.insert_call(Call.from_dict(row))
    scaffolds = [VariantScaffold.from_dict(row) for row in data.get('scaffolds', [])]
    return store, scaffolds


def dump_graph(store, filename, scaffolds=None, log=DEVNULL):
    """
    write the store contents to a json file
    """
    log('writing:', filename)
    with open(filename, 'w') as fh:
        json.dump(graph_to_dict(store, scaffolds), fh, indent=2)


def load_graph(filename, log=DEVNULL):
    """
    read a store (and scaffolds) from a json file written by :func:`dump_graph`
    """
    log('loading:', filename)
    with open(filename, 'r') as fh:
        data = json.load(fh)
    store, scaffolds = graph_from_dict(data, log=log)
    log('loaded {} variants, {} alleles, {} callsets and {} calls'.format(
        len(store.variants), len(store.alleles), len(store.callsets), len(store.calls)))
    return store, scaffolds
