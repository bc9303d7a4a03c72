import json

import pytest
from vargraph.constants import CALLSET_TYPE, SIDE
from vargraph.io import dump_graph, dumps, from_dict, graph_from_dict, graph_to_dict, load_graph, loads, to_dict
from vargraph.scaffold import assemble
from vargraph.variant import Allele, Call, CallSet, Segment, Variant

from ..util import build_example_graph, loc


@pytest.fixture
def store():
    store = build_example_graph()
    store.insert_allele(Allele([Segment('ref', 0, 4), Segment('ins1'), Segment('ref', 4, 10)], id='a1'))
    store.insert_allele(Allele([Segment('ref', 10, 0, SIDE.MINUS)], id='a2'))
    store.insert_callset(CallSet('cs1', 'sample1', CALLSET_TYPE.HAPLOTYPE, info={'z': '1', 'a': '2'}))
    store.insert_call(Call('cs1', 'a1', copy_number=0, probability=[0.25]))
    store.insert_call(Call('cs1', 'a2', dosage=1, read_count=12, evidence={'reads': ['r1', 'r2']}))
    return store


class TestRecordDicts:
    def test_type_tag(self):
        row = to_dict(Variant.root('ref', 'ACGT'))
        assert row['type'] == 'Variant'
        assert from_dict(row) == Variant.root('ref', 'ACGT')

    def test_from_dict_does_not_modify_input(self):
        row = to_dict(Segment('ref', 0, 4))
        from_dict(row)
        assert row['type'] == 'Segment'

    def test_unknown_type(self):
        with pytest.raises(KeyError):
            from_dict({'type': 'Breakpoint'})

    def test_missing_type(self):
        with pytest.raises(KeyError):
            from_dict({'id': 'ref'})

    def test_json_string(self):
        variant = Variant('ins1', loc('ref', 3, SIDE.PLUS), loc('ref', 4, SIDE.MINUS), 'TTT')
        assert loads(dumps(variant)) == variant

    def test_absent_call_fields_stay_absent(self):
        call = loads(dumps(Call('cs1', 'a1', read_count=0)))
        assert call.read_count == 0
        assert call.copy_number is None
        assert call.dosage is None


class TestGraphDicts:
    def test_contents(self, store):
        data = graph_to_dict(store)
        assert [v['id'] for v in data['variants']] == ['ref', 'ins1', 'del1', 'snp1', 'nested']
        assert [a['id'] for a in data['alleles']] == ['a1', 'a2']
        assert len(data['calls']) == 2
        assert data['scaffolds'] == []

    def test_round_trip(self, store):
        scaffold = assemble(['a1', 'a2'], [True, False], [100], scaffold_id='s1')
        copy, scaffolds = graph_from_dict(graph_to_dict(store, [scaffold]))
        assert dict(copy.variants) == dict(store.variants)
        assert dict(copy.alleles) == dict(store.alleles)
        assert dict(copy.callsets) == dict(store.callsets)
        assert copy.calls == store.calls
        assert scaffolds == [scaffold]

    def test_attribute_order_survives(self, store):
        copy, _ = graph_from_dict(graph_to_dict(store))
        assert list(copy.get_callset('cs1').info) == ['z', 'a']

    def test_empty(self):
        copy, scaffolds = graph_from_dict({})
        assert len(copy) == 0
        assert scaffolds == []


class TestGraphFiles:
    def test_dump_and_load(self, store, tmp_path):
        filename = str(tmp_path / 'graph.json')
        dump_graph(store, filename)
        with open(filename) as fh:
            assert json.load(fh)['variants'][0]['id'] == 'ref'
        copy, scaffolds = load_graph(filename)
        assert dict(copy.variants) == dict(store.variants)
        assert copy.calls == store.calls
        assert scaffolds == []

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_graph(str(tmp_path / 'missing.json'))
