import logging

import yaml

from topic_trie.trie import TopicTrie, TrieException


class TrieSchemaError(TrieException): pass      # flake8: E701


TRIE_OPTIONS = ('single_wild', 'multi_wild', 'separator')

logger = logging.getLogger('TopicTrieSchema')


def load_schema(schema) -> TopicTrie:
    """
    Create the trie from a schema.

    Example of schema:
        trie:
          single_wild: '+'
          multi_wild: '#'
          separator: /
        topics:
          - key: foo/+/bar
            value: 1
          - key: foo/#
            value: 2

    :param schema: dict, YAML string or file descriptor of YAML file
    :return: TopicTrie
    """
    if not isinstance(schema, dict):
        schema = yaml.safe_load(schema) or {}
    if not isinstance(schema, dict):
        raise TrieSchemaError("The schema has to be a mapping.")
    options = schema.get('trie') or {}
    if not isinstance(options, dict):
        raise TrieSchemaError("The parameter 'trie' has to be a mapping.")
    topics = schema.get('topics') or []
    if not isinstance(topics, list):
        raise TrieSchemaError("The parameter 'topics' has to be a list.")
    unknown = set(options) - set(TRIE_OPTIONS)
    if unknown:
        raise TrieSchemaError(
            f"Unknown trie options: {', '.join(sorted(unknown))}")
    trie = TopicTrie(**options)
    for topic_info in topics:
        if not isinstance(topic_info, dict) or 'key' not in topic_info:
            raise TrieSchemaError(
                f"The topic '{topic_info}' has not got the parameter 'key'.")
        trie.insert(str(topic_info['key']), topic_info.get('value'))
    logger.info(f"The trie was loaded with {len(trie)} topics.")
    return trie
