import logging
from collections import namedtuple


class TrieException(Exception): pass                        # flake8: E701
class TrieInvalidWildcardPosition(TrieException): pass      # flake8: E701


KeyValue = namedtuple('KeyValue', 'key value')

_EMPTY = object()


class TopicTrie:
    """
    Prefix tree of delimiter separated keys with optional wildcard tokens.
    """

    class TopicNode(object):
        __slots__ = 'children', 'content'

        def __init__(self):
            self.children = {}
            self.content = _EMPTY

        @property
        def has_content(self) -> bool:
            return self.content is not _EMPTY

    def __init__(self, single_wild: str = None, multi_wild: str = None,
                 separator: str = ''):
        """
        Constructor TopicTrie
        :param single_wild:str  single-level wildcard token (None - disabled)
        :param multi_wild:str   multi-level wildcard token (None - disabled)
        :param separator:str    delimiter of key segments (default '')
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        self._root = self.TopicNode()
        self._single_wild = single_wild
        self._multi_wild = multi_wild
        self._separator = separator or ''

    @classmethod
    def mqtt(cls) -> 'TopicTrie':
        """
        returns the trie with MQTT topic grammar ('+', '#', '/')
        """
        return cls(single_wild='+', multi_wild='#', separator='/')

    @property
    def single_wild(self) -> str:
        return self._single_wild

    @property
    def multi_wild(self) -> str:
        return self._multi_wild

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def is_single_wild(self) -> bool:
        return self._single_wild is not None

    @property
    def is_multi_wild(self) -> bool:
        return self._multi_wild is not None

    def _split(self, key: str) -> list:
        if self._separator:
            return key.split(self._separator)
        return list(key)

    def _join(self, parts) -> str:
        return self._separator.join(parts)

    def _check_key(self, parts: list, operation: str):
        if not self.is_multi_wild:
            return
        for i, part in enumerate(parts[:-1]):
            if part == self._multi_wild:
                self.logger.debug(
                    f"The {operation} key '{self._join(parts)}' was rejected, "
                    f"multi-level wildcard at segment {i}.")
                raise TrieInvalidWildcardPosition(
                    f"The multi-level wildcard '{self._multi_wild}' is "
                    f"permitted only at the end of the {operation} key.")

    def insert(self, key: str, value) -> bool:
        """
        Store the value under the key, an existing value is overwritten.
        :param key: str
        :param value: any
        :return: True
        :raise TrieInvalidWildcardPosition: the multi-level wildcard is not
                                            the last segment of the key
        """
        parts = self._split(key)
        self._check_key(parts, 'insert')
        node = self._root
        for part in parts:
            node = node.children.setdefault(part, self.TopicNode())
        node.content = value
        self.logger.debug(f"The key '{key}' was inserted.")
        return True

    def retrieve(self, key: str):
        """
        Return the value stored exactly under the key or None.
        Wildcards in the key are compared as plain segments.
        """
        parts = self._split(key)
        self._check_key(parts, 'retrieve')
        node = self._root
        for part in parts:
            node = node.children.get(part)
            if node is None:
                return None
        return node.content if node.has_content else None

    def _key(self, prefix) -> str:
        # prefix is a linked chain of (part, parent prefix), None is the root
        parts = []
        while prefix is not None:
            part, prefix = prefix
            parts.append(part)
        parts.reverse()
        return self._join(parts)

    def _collect(self, node, prefix, matches):
        stack = [(node, prefix)]
        while stack:
            node, prefix = stack.pop()
            if node.has_content:
                matches.append(KeyValue(self._key(prefix), node.content))
            for part, child in node.children.items():
                stack.append((child, (part, prefix)))

    def match(self, pattern: str) -> [KeyValue]:
        """
        Return all stored entries compatible with the pattern.

        The wildcards of the pattern are expanded against the stored keys and
        the wildcards of the stored keys are expanded against the literal
        segments of the pattern. The order of the result is not defined.
        :param pattern: str
        :return: [KeyValue]
        """
        parts = self._split(pattern)
        matches = []
        if not parts:
            if self._root.has_content:
                matches.append(KeyValue('', self._root.content))
            return matches
        last = len(parts) - 1

        def _step(child, i, prefix):
            if i == last:
                if child.has_content:
                    matches.append(KeyValue(self._key(prefix), child.content))
            else:
                stack.append((child, i + 1, prefix))

        stack = [(self._root, 0, None)]
        while stack:
            node, i, prefix = stack.pop()
            part = parts[i]
            if self.is_multi_wild and part == self._multi_wild:
                self._collect(node, prefix, matches)
            elif self.is_single_wild and part == self._single_wild:
                for key, child in node.children.items():
                    _step(child, i, (key, prefix))
            else:
                child = node.children.get(part)
                if child is not None:
                    _step(child, i, (part, prefix))
                if self.is_single_wild:
                    child = node.children.get(self._single_wild)
                    if child is not None:
                        _step(child, i, (self._single_wild, prefix))
                if self.is_multi_wild:
                    # the stored multi-level wildcard takes the rest of pattern
                    child = node.children.get(self._multi_wild)
                    if child is not None and child.has_content:
                        matches.append(KeyValue(
                            self._key((self._multi_wild, prefix)),
                            child.content))
        return matches

    def delete(self, key: str) -> bool:
        """
        Remove the value stored under the key and prune the nodes left empty.
        :return: bool - False if nothing was stored under the key
        """
        chain = []
        node = self._root
        for part in self._split(key):
            child = node.children.get(part)
            if child is None:
                return False
            chain.append((node, part, child))
            node = child
        if not node.has_content:
            return False
        node.content = _EMPTY
        for parent, part, node in reversed(chain):
            if node.children or node.has_content:
                break
            del parent.children[part]
        self.logger.debug(f"The key '{key}' was deleted.")
        return True

    def items(self) -> [KeyValue]:
        """
        returns all stored entries
        """
        res = []
        self._collect(self._root, None, res)
        return res

    def values(self) -> list:
        _values = []
        for item in self.items():
            if item.value not in _values:
                _values.append(item.value)
        return _values

    def __len__(self):
        return len(self.items())

    def __contains__(self, key):
        node = self._root
        for part in self._split(key):
            node = node.children.get(part)
            if node is None:
                return False
        return node.has_content
