import logging
import time
from typing import List, Optional, Tuple

import numpy as np

from .chain import Chain
from .errors import InvalidArgument
from .prefix import Prefix

logger = logging.getLogger(__name__)


def default_rng(seed: Optional[int] = None) -> np.random.Generator:
    """ A numpy generator seeded from the clock unless a seed is given. """
    if seed is None:
        seed = time.time_ns()
    return np.random.default_rng(seed)


class Generator:
    """
    Walks a Chain, picking each next token with probability proportional to
    its recorded frequency after the current prefix.
    For basic usage, run `self.generate(n)` and read the text from `self.output`.
    """

    def __init__(self, chain: Chain, rng=None, logging: bool = False):
        """
        Initializes a Markov Generator.

        Parameters:
            chain (Chain): The frequency table to walk
            rng: Random source with an `integers(low, high)` method returning a
                uniform int in [low, high). Defaults to a clock-seeded numpy Generator
            logging (bool): Optional parameter to trace every step
        """
        self.chain = chain
        self.rng = rng if rng is not None else default_rng()
        self.logging = logging

        self.prefix = Prefix(chain.prefix_len)
        self.output_tokens: List[str] = []
        self.finished = False

    @property
    def output(self) -> str:
        """ Returns the generated tokens joined by spaces. """
        return " ".join(self.output_tokens)

    def candidates(self, key: str) -> Tuple[List[str], np.ndarray]:
        """
        The suffixes of `key` in table order and their running frequency totals.
        Index i of the weighted pool (every suffix repeated by its frequency)
        belongs to the first suffix whose total exceeds i.
        """
        suffixes = self.chain.lookup(key)
        if not suffixes:
            return [], np.array([], dtype=np.int64)
        return list(suffixes.keys()), np.cumsum(list(suffixes.values()), dtype=np.int64)

    def step(self) -> Optional[str]:
        """ Draws one token and shifts it into the prefix. Returns None at a dead end. """
        if self.finished:
            return None

        key = self.prefix.key
        choices, cumdist = self.candidates(key)
        if not choices:
            if self.logging:
                logger.info(f"{self.prefix.tokens}: no continuations, stopping")
            self.finished = True
            return None

        pool_size = int(cumdist[-1])
        index = int(self.rng.integers(0, pool_size))
        next_token = choices[int(np.searchsorted(cumdist, index, side="right"))]

        if self.logging:
            logger.info(f"{self.prefix.tokens}:")
            logger.info(f"\tPossible Transitions: {self._pretty_print_list(self.chain.lookup(key), 10)}")
            logger.info(f"\tPool Size: {pool_size}\tDrawn Index: {index}\tToken: {next_token}")

        self.output_tokens.append(next_token)
        self.prefix.shift(next_token)
        return next_token

    def generate(self, n: int) -> List[str]:
        """
        Walks from the all-empty prefix and returns up to `n` tokens, fewer if
        the walk reaches a prefix with no recorded suffixes.
        """
        if n <= 0:
            raise InvalidArgument(f"number of words should be a positive number, got {n}")

        self.prefix = Prefix(self.chain.prefix_len)
        self.output_tokens = []
        self.finished = False

        a = time.perf_counter()
        for _ in range(n):
            if self.step() is None:
                break
        b = time.perf_counter()

        logger.debug(f"Generated {len(self.output_tokens)} of {n} words in {b - a:0.4f} secs")
        return self.output_tokens

    @staticmethod
    def _pretty_print_list(suffixes, limit):
        lst = [f"'{s}' x{count}" for s, count in suffixes.items()]
        if len(lst) == 1:
            return lst[0]
        elif len(lst) == 2:
            return f"{lst[0]} and {lst[1]}"
        elif len(lst) <= limit:
            return ", ".join(lst[:-1]) + ", and " + lst[-1]
        else:
            remaining_count = len(lst) - limit
            return ", ".join(lst[:limit]) + f", and {remaining_count} more"
