import io

import pytest
import yaml

from topic_trie import load_schema, TrieSchemaError, \
    TrieInvalidWildcardPosition


def test_load_schema_simple():

    schema = """
    trie:
      single_wild: '+'
      multi_wild: '#'
      separator: /
    topics:
      - key: foo/#
        value: tube1
      - key: +/bar
        value: tube2
    """

    trie = load_schema(yaml.safe_load(schema))

    assert trie.separator == '/'
    assert trie.single_wild == '+'
    assert trie.multi_wild == '#'
    assert len(trie) == 2
    assert trie.retrieve('foo/#') == 'tube1'
    assert [m.value for m in trie.match('foo/aaa')] == ['tube1']
    assert [m.value for m in trie.match('xxx/bar')] == ['tube2']
    assert trie.match('xxx/aaa') == []


def test_load_schema_from_string_and_stream():

    schema = """
    trie:
      separator: .
    topics:
      - key: a.b
        value: 1
      - key: a.c
    """

    for source in (schema, io.StringIO(schema)):
        trie = load_schema(source)
        assert not trie.is_single_wild
        assert not trie.is_multi_wild
        assert trie.retrieve('a.b') == 1
        assert 'a.c' in trie
        assert trie.retrieve('a.c') is None


def test_load_schema_defaults():
    trie = load_schema({})
    assert trie.separator == ''
    assert len(trie) == 0
    trie = load_schema('')
    assert len(trie) == 0


@pytest.mark.parametrize("schema", [
    "- foo",
    "trie:\n  delimiter: /\n",
    "topics:\n  - value: 1\n",
    "topics:\n  - foo/bar\n",
    "trie: [separator]\n",
    "topics: 5\n",
    "topics:\n  key: a\n",
])
def test_load_schema_invalid(schema):
    with pytest.raises(TrieSchemaError):
        load_schema(schema)


def test_load_schema_invalid_wildcard():

    schema = """
    trie:
      multi_wild: '#'
      separator: /
    topics:
      - key: foo/#/bar
        value: 1
    """

    with pytest.raises(TrieInvalidWildcardPosition):
        load_schema(schema)
