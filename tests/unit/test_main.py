from unittest import mock

import pytest
from vargraph.config import GRAPH_OPTIONS
from vargraph.constants import EXIT_ERROR, EXIT_OK
from vargraph.error import AmbiguousContext, NotFound
from vargraph.io import dump_graph
from vargraph.main import main
from vargraph.variant import Allele, Segment

from ..util import build_cycle_graph, build_example_graph


@pytest.fixture
def graph_file(tmp_path):
    store = build_example_graph()
    store.insert_allele(Allele([Segment('ref', 0, 4), Segment('ins1'), Segment('ref', 4, 10)], id='a1'))
    store.insert_allele(Allele([Segment('ref', 0, 6), Segment('ref', 8, 10)], id='a2'))
    filename = str(tmp_path / 'graph.json')
    dump_graph(store, filename)
    return filename


@pytest.fixture
def cycle_file(tmp_path):
    filename = str(tmp_path / 'cycle.json')
    dump_graph(build_cycle_graph(), filename)
    return filename


@pytest.fixture(autouse=True)
def reset_options():
    yield
    GRAPH_OPTIONS.max_join_depth = None


def printed(print_mock):
    return [c[0][0] for c in print_mock.call_args_list]


class TestMain:
    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])

    def test_validate(self, graph_file):
        with mock.patch('builtins.print') as print_mock:
            assert main(['validate', graph_file]) == EXIT_OK
        print_mock.assert_not_called()

    def test_validate_with_violations(self, cycle_file):
        with mock.patch('builtins.print') as print_mock:
            assert main(['validate', cycle_file]) == EXIT_ERROR
        lines = printed(print_mock)
        assert len(lines) == 2
        assert all(['UnanchoredCycle' in str(line) for line in lines])

    def test_resolve(self, graph_file):
        with mock.patch('builtins.print') as print_mock:
            assert main(['resolve', graph_file, 'ins1', '2', '+']) == EXIT_OK
        assert printed(print_mock) == ['ref\t3\t+']

    def test_resolve_minus_side(self, graph_file):
        with mock.patch('builtins.print') as print_mock:
            assert main(['resolve', graph_file, 'ref', '3', '-']) == EXIT_OK
        assert printed(print_mock) == ['ref\t3\t-']

    def test_resolve_max_join_depth(self, graph_file):
        with pytest.raises(AmbiguousContext):
            main(['resolve', graph_file, 'ins1', '0', '-', '--max_join_depth', '0'])

    def test_resolve_bad_side(self, graph_file):
        with pytest.raises(SystemExit):
            main(['resolve', graph_file, 'ins1', '0', 'x'])

    def test_resolve_cycle(self, cycle_file):
        with pytest.raises(AmbiguousContext):
            main(['resolve', cycle_file, 'a', '0', '-'])

    def test_sequence(self, graph_file):
        with mock.patch('builtins.print') as print_mock:
            assert main(['sequence', graph_file, 'a1', 'a2']) == EXIT_OK
        assert printed(print_mock) == ['>a1', 'ACGTTTTACGTAC', '>a2', 'ACGTACAC']

    def test_sequence_missing_allele(self, graph_file):
        with mock.patch('builtins.print'):
            with pytest.raises(NotFound):
                main(['sequence', graph_file, 'a3'])

    def test_log_file(self, graph_file, tmp_path):
        log_file = str(tmp_path / 'run.log')
        with mock.patch('builtins.print'):
            main(['validate', graph_file, '--log', log_file])
        with open(log_file) as fh:
            content = fh.read()
        assert 'vargraph:' in content
        assert 'validated 5 variants' in content
