from .trie import TopicTrie, KeyValue, TrieException, \
    TrieInvalidWildcardPosition                                 # noqa: F401
from .schema import load_schema, TrieSchemaError                # noqa: F401
