from typing import List

from . import settings
from .errors import InvalidArgument, InvalidFormat


class Prefix:
    """
    A fixed-length window over the most recent tokens, used as a chain key.
    Starts out filled with empty tokens and only ever changes through `shift`.
    """

    def __init__(self, length: int):
        if length <= 0:
            raise InvalidArgument(f"prefix length must be positive, got {length}")
        self.tokens = [""] * length

    def __len__(self):
        return len(self.tokens)

    def __repr__(self):
        return f"Prefix({self.tokens!r})"

    @property
    def key(self) -> str:
        """ The tokens joined by single spaces, as stored in the chain. """
        return settings.FIELD_SEPARATOR.join(self.tokens)

    def shift(self, word: str):
        """ Drops the oldest token and appends `word`. """
        self.tokens[:-1] = self.tokens[1:]
        self.tokens[-1] = word

    @classmethod
    def from_key(cls, key: str, length: int) -> "Prefix":
        """ Rebuilds a prefix from its chain key. """
        tokens = key.split(settings.FIELD_SEPARATOR)
        if len(tokens) != length:
            raise InvalidFormat(f"prefix {key!r} has {len(tokens)} tokens, expected {length}")
        prefix = cls(length)
        prefix.tokens = tokens
        return prefix

    def to_fields(self) -> List[str]:
        """ The tokens as modelfile fields, empty tokens replaced by the quote-pair literal. """
        return [token if token else settings.EMPTY_TOKEN_LITERAL for token in self.tokens]

    @classmethod
    def from_fields(cls, fields: List[str]) -> "Prefix":
        """ Inverse of `to_fields`. """
        prefix = cls(len(fields))
        prefix.tokens = ["" if field == settings.EMPTY_TOKEN_LITERAL else field for field in fields]
        return prefix
