from .chain import Chain, tokenize
from .errors import InvalidArgument, InvalidFormat, IOFailure, MarkovError
from .generator import Generator
from .prefix import Prefix

__version__ = "0.1.0"
