"""
Reading and writing the modelfile format.

    <prefix length>
    <tok1> ... <tokN> <suffix> <count> <suffix> <count> ...

One line per prefix. Fields are separated by single spaces and every line
ends with a trailing space. An empty token is written as the literal `""`.
Tokens that contain a space, or that are themselves `""`, cannot be
represented.
"""
import io
from typing import Dict, Iterable, Iterator, TextIO

from . import settings
from .chain import Chain
from .errors import InvalidFormat
from .prefix import Prefix


def iter_lines(chain: Chain) -> Iterator[str]:
    """ Yields the modelfile lines for `chain`, each ending in a newline. """
    sep = settings.FIELD_SEPARATOR
    yield f"{chain.prefix_len}\n"
    for key, suffixes in chain.items():
        fields = Prefix.from_key(key, chain.prefix_len).to_fields()
        line = sep.join(fields) + sep
        for suffix, count in suffixes.items():
            line += f"{suffix}{sep}{count}{sep}"
        yield line + "\n"


def dump(chain: Chain, fp: TextIO):
    for line in iter_lines(chain):
        fp.write(line)


def dumps(chain: Chain) -> str:
    return "".join(iter_lines(chain))


def _positive_int(field: str, what: str, line_number: int) -> int:
    # isdigit() alone passes superscripts and other non-ASCII digits; the format only writes ASCII ones
    if not (field.isascii() and field.isdigit()) or int(field) <= 0:
        raise InvalidFormat(f"{what} should be a positive number, got {field!r}", line_number)
    return int(field)


def _parse_line(line: str, prefix_len: int, line_number: int):
    sep = settings.FIELD_SEPARATOR
    fields = line.split(sep)
    if fields[-1] == "":
        fields.pop()

    if len(fields) < prefix_len:
        raise InvalidFormat(f"expected at least {prefix_len} prefix fields, got {len(fields)}", line_number)

    key = Prefix.from_fields(fields[:prefix_len]).key
    rest = fields[prefix_len:]
    if len(rest) % 2:
        raise InvalidFormat(f"suffix {rest[-1]!r} has no frequency", line_number)

    suffixes = {}
    for suffix, count in zip(rest[::2], rest[1::2]):
        suffixes[suffix] = _positive_int(count, "frequency", line_number)
    return key, suffixes


def read_modelfile(chain: Chain, lines: Iterable[str]):
    """
    Loads modelfile `lines` into `chain`.

    The declared prefix length must match `chain.prefix_len`. A later line for
    a prefix already seen replaces the earlier one. Any malformed line raises
    InvalidFormat and leaves `chain` untouched.
    """
    lines = iter(lines)
    try:
        header = next(lines)
    except StopIteration:
        raise InvalidFormat("modelfile is empty", 1) from None

    prefix_len = _positive_int(header.strip(), "number of prefixes", 1)
    if prefix_len != chain.prefix_len:
        raise InvalidFormat(f"modelfile has prefix length {prefix_len}, chain expects {chain.prefix_len}", 1)

    staged: Dict[str, Dict[str, int]] = {}
    for line_number, line in enumerate(lines, start=2):
        line = line.rstrip("\r\n")
        if not line:
            continue
        key, suffixes = _parse_line(line, prefix_len, line_number)
        staged[key] = suffixes

    for key, suffixes in staged.items():
        chain.set_suffixes(key, suffixes)


def parse(lines: Iterable[str]) -> Chain:
    """ Builds a new chain from modelfile lines, taking the prefix length from the header. """
    lines = list(lines)
    if not lines:
        raise InvalidFormat("modelfile is empty", 1)
    chain = Chain(_positive_int(lines[0].strip(), "number of prefixes", 1))
    read_modelfile(chain, lines)
    return chain


def load(fp: TextIO) -> Chain:
    return parse(fp)


def loads(text: str) -> Chain:
    return parse(io.StringIO(text))
