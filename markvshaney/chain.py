import logging
from typing import Dict, Iterable, Iterator, Optional, TextIO, Tuple, Union

from . import settings
from .errors import InvalidArgument
from .prefix import Prefix

logger = logging.getLogger(__name__)


def tokenize(source: Union[str, TextIO, Iterable[str]]) -> Iterator[str]:
    """ Yields the whitespace-delimited words of a string, a text file or an iterable of lines. """
    if isinstance(source, str):
        source = source.splitlines()
    for line in source:
        yield from line.split()


class Chain:
    """
    A prefix -> suffix frequency table.

    Keys are prefixes joined by single spaces (see `Prefix.key`), values map each
    suffix seen after that prefix to the number of times it was seen.
    """

    def __init__(self, prefix_len: int = settings.DEFAULT_PREFIX_LEN):
        if prefix_len <= 0:
            raise InvalidArgument(f"prefix length must be positive, got {prefix_len}")
        self.prefix_len = prefix_len
        self.model: Dict[str, Dict[str, int]] = {}
        self._window = Prefix(prefix_len)

    def __len__(self):
        return len(self.model)

    def __contains__(self, key):
        return key in self.model

    def __iter__(self):
        return iter(self.model)

    def __eq__(self, other):
        if not isinstance(other, Chain):
            return NotImplemented
        return self.prefix_len == other.prefix_len and self.model == other.model

    def __repr__(self):
        return f"Chain(prefix_len={self.prefix_len}, prefixes={len(self.model)})"

    def items(self) -> Iterator[Tuple[str, Dict[str, int]]]:
        return iter(self.model.items())

    def build(self, tokens: Iterable[str]) -> int:
        """
        Feeds `tokens` through the sliding prefix window, counting every
        (prefix, suffix) pair. The window is not reset between calls, so several
        sources built one after another behave as one continuous stream.

        Returns the number of tokens consumed.
        """
        consumed = 0
        for token in tokens:
            key = self._window.key
            suffixes = self.model.get(key)
            if suffixes is None:
                self.model[key] = {token: 1}
            else:
                suffixes[token] = suffixes.get(token, 0) + 1
            self._window.shift(token)
            consumed += 1

        logger.debug(f"Consumed {consumed} tokens, chain now holds {len(self.model)} prefixes")
        return consumed

    def reset(self):
        """ Empties the build window so the next token starts a fresh stream. """
        self._window = Prefix(self.prefix_len)

    def lookup(self, key: str) -> Optional[Dict[str, int]]:
        """ Returns the suffix counts recorded for `key`, or None. """
        return self.model.get(key)

    def add(self, key: str, suffix: str, count: int = 1):
        """ Records `count` more occurrences of `suffix` after `key`. """
        if count < 1:
            raise InvalidArgument(f"count must be positive, got {count}")
        suffixes = self.model.setdefault(key, {})
        suffixes[suffix] = suffixes.get(suffix, 0) + count

    def set_suffixes(self, key: str, suffixes: Dict[str, int]):
        """ Replaces the whole entry for `key`. """
        for suffix, count in suffixes.items():
            if count < 1:
                raise InvalidArgument(f"count for {suffix!r} must be positive, got {count}")
        self.model[key] = dict(suffixes)

    def observations(self, key: str) -> int:
        """ How many times `key` was followed by anything. """
        return sum(self.model.get(key, {}).values())
