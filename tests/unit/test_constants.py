import os
from unittest import mock

import pytest
from vargraph.constants import (
    CALLSET_TYPE,
    SIDE,
    VIOLATION,
    GraphNamespace,
    cast_boolean,
    flip_side,
    reverse_complement,
)


class TestConstants:
    def test_side_values(self):
        assert SIDE.PLUS == '+'
        assert SIDE.MINUS == '-'
        assert sorted(SIDE.values()) == ['+', '-']

    def test_enforce(self):
        assert SIDE.enforce('+') == '+'
        assert VIOLATION.enforce('LengthMismatch') == VIOLATION.LENGTH_MISMATCH
        with pytest.raises(KeyError):
            SIDE.enforce('?')

    def test_call_enforce(self):
        assert CALLSET_TYPE('GENOTYPE') == CALLSET_TYPE.GENOTYPE
        with pytest.raises(TypeError):
            CALLSET_TYPE('genotype')

    def test_flip_side(self):
        assert flip_side(SIDE.PLUS) == SIDE.MINUS
        assert flip_side(SIDE.MINUS) == SIDE.PLUS

    def test_reverse_complement(self):
        assert reverse_complement('CGAT') == 'ATCG'
        assert reverse_complement('') == ''
        assert reverse_complement('aacN') == 'Ngtt'

    def test_reverse_complement_bad_input(self):
        with pytest.raises(ValueError):
            reverse_complement('AC-GT')

    def test_cast_boolean(self):
        assert cast_boolean('true')
        assert cast_boolean('Y')
        assert not cast_boolean('0')
        assert not cast_boolean('false')
        with pytest.raises(TypeError):
            cast_boolean('maybe')


class TestGraphNamespace:
    def test_attributes(self):
        nspace = GraphNamespace(thing=1, otherthing=2)
        assert nspace.thing == 1
        assert nspace['otherthing'] == 2
        assert nspace.keys() == ['thing', 'otherthing']
        assert list(nspace) == ['thing', 'otherthing']
        assert 'thing' in nspace
        assert repr(nspace) == 'GraphNamespace(otherthing=2, thing=1)'

    def test_missing_attribute(self):
        with pytest.raises(AttributeError):
            GraphNamespace(thing=1).other

    def test_respecify_attribute(self):
        nspace = GraphNamespace(thing=1)
        with pytest.raises(AttributeError):
            nspace.add('thing', 2)

    def test_private_attributes(self):
        with pytest.raises(ValueError):
            GraphNamespace()._thing = 1

    def test_env_name(self):
        assert GraphNamespace(a=1).get_env_name('max_depth') == 'VARGRAPH_MAX_DEPTH'

    def test_not_env_overwritable_by_default(self):
        nspace = GraphNamespace(thing=1)
        with mock.patch.dict(os.environ, {'VARGRAPH_THING': '5'}):
            assert nspace.thing == 1

    def test_env_overwritable(self):
        nspace = GraphNamespace()
        nspace.add('thing', 1, defn='a thing', env_overwritable=True)
        with mock.patch.dict(os.environ, {'VARGRAPH_THING': '5'}):
            assert nspace.thing == 5
        assert nspace.thing == 1
        assert nspace.define('thing') == 'a thing'
        assert nspace.type('thing') == int

    def test_define_default(self):
        nspace = GraphNamespace(thing=1)
        assert nspace.define('thing', None) is None
        with pytest.raises(KeyError):
            nspace.define('thing')

    def test_env_nullable(self):
        nspace = GraphNamespace()
        nspace.add('depth', 4, nullable=True, env_overwritable=True)
        with mock.patch.dict(os.environ, {'VARGRAPH_DEPTH': 'None'}):
            assert nspace.depth is None
        with mock.patch.dict(os.environ, {'VARGRAPH_DEPTH': ' 7 '}):
            assert nspace.depth == 7

    def test_bool_type_uses_cast_boolean(self):
        nspace = GraphNamespace()
        nspace.add('flag', False, env_overwritable=True)
        assert nspace.type('flag') == cast_boolean
        with mock.patch.dict(os.environ, {'VARGRAPH_FLAG': 'true'}):
            assert nspace.flag is True
