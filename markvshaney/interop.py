"""
Conversion between Chain and markovify's Chain, so models can be shared with
code that already works with markovify JSON dumps.

markovify pads the start of a sentence with BEGIN where a Chain uses the empty
token, and marks the end of a sentence with an END suffix, which a Chain has
no use for and drops.
"""
import json
import logging

import markovify
from markovify.chain import BEGIN, END

from . import settings
from .chain import Chain
from .errors import InvalidArgument, InvalidFormat, IOFailure, MarkovError
from .prefix import Prefix

logger = logging.getLogger(__name__)


def to_markovify(chain: Chain) -> markovify.Chain:
    """ Returns a markovify.Chain holding the same counts as `chain`. """
    begin_key = Prefix(chain.prefix_len).key
    if begin_key not in chain:
        raise InvalidArgument("markovify needs a chain with an all-empty prefix to start from")

    model = {}
    for key, suffixes in chain.items():
        state = tuple(token if token else BEGIN for token in Prefix.from_key(key, chain.prefix_len).tokens)
        model[state] = dict(suffixes)
    return markovify.Chain(None, chain.prefix_len, model=model)


def _count(word, count) -> int:
    # bool is an int subclass; JSON true/false are not counts
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidFormat(f"count for {word!r} should be an integer, got {count!r}")
    return count


def _counts(follow) -> dict:
    # A compiled markovify chain stores [choices, cumulative weights]
    if isinstance(follow, list):
        if len(follow) != 2:
            raise InvalidFormat(f"compiled transitions should be [choices, cumdist], got {follow!r}")
        choices, cumdist = follow
        counts, previous = {}, 0
        for choice, total in zip(choices, cumdist):
            total = _count(choice, total)
            counts[choice] = total - previous
            previous = total
        return counts
    if not isinstance(follow, dict):
        raise InvalidFormat(f"transitions should be a mapping, got {follow!r}")
    return {word: _count(word, count) for word, count in follow.items()}


def from_markovify(mchain: markovify.Chain) -> Chain:
    """ Returns a Chain holding the counts of `mchain`, without its END transitions. """
    chain = Chain(mchain.state_size)
    for state, follow in mchain.model.items():
        if len(state) != mchain.state_size:
            raise InvalidFormat(f"state {state!r} does not have {mchain.state_size} words")
        key = settings.FIELD_SEPARATOR.join("" if token == BEGIN else token for token in state)
        suffixes = {word: count for word, count in _counts(follow).items() if word != END and count > 0}
        if suffixes:
            chain.set_suffixes(key, suffixes)
    return chain


def export_json(chain: Chain, path: str):
    """ Writes `chain` as a markovify chain JSON dump. """
    try:
        with open(path, "w", encoding=settings.ENCODING) as f:
            f.write(to_markovify(chain).to_json())
    except OSError as e:
        raise IOFailure(path, str(e)) from e
    logger.info(f"Markov model has been exported as '{path}'.")


def import_json(path: str) -> Chain:
    """ Reads a markovify.Chain or markovify.Text JSON dump into a Chain. """
    try:
        with open(path, "r", encoding=settings.ENCODING) as f:
            obj = json.load(f)
    except OSError as e:
        raise IOFailure(path, str(e)) from e
    except ValueError as e:
        raise InvalidFormat(f"{path} is not JSON: {e}") from e

    try:
        if isinstance(obj, dict) and "chain" in obj:
            mchain = markovify.Text.from_dict(obj).chain
        elif isinstance(obj, list) and obj:
            mchain = markovify.Chain.from_json(obj)
        else:
            raise InvalidFormat(f"{path} is not a markovify chain or text model")
        return from_markovify(mchain)
    except MarkovError:
        raise
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
        # markovify looks up the all-BEGIN state and compiles its transitions while loading
        raise InvalidFormat(f"{path} is not a usable markovify model: {e!r}") from e
