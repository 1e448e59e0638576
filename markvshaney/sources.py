import logging
import os
import time
from typing import Iterable, List, Optional

from . import modelfile, settings
from .chain import Chain, tokenize
from .errors import IOFailure

logger = logging.getLogger(__name__)


def model_path(name: str) -> str:
    """ Bare names (no directory, no extension) resolve to a .txt file under MODELS_DIR. """
    if os.path.dirname(name) or os.path.splitext(name)[1]:
        return name
    return os.path.join(settings.MODELS_DIR, f"{name}.txt")


def build_from_files(chain: Chain, paths: Iterable[str], skip_unreadable: Optional[bool] = None) -> List[str]:
    """
    Builds `chain` from each text file in `paths`, in order, as one continuous
    token stream.

    An input that can't be read is logged and skipped, or raises IOFailure when
    `skip_unreadable` is False. Returns the paths that were skipped.
    """
    if skip_unreadable is None:
        skip_unreadable = settings.SKIP_UNREADABLE_INPUTS

    skipped = []
    for path in paths:
        start_time = time.perf_counter()
        try:
            with open(path, "r", encoding=settings.ENCODING) as f:
                consumed = chain.build(tokenize(f))
        except (OSError, UnicodeDecodeError) as e:
            if not skip_unreadable:
                raise IOFailure(path, str(e)) from e
            logger.error(f"Something wrong with the file {path}: {e}")
            skipped.append(path)
            continue
        logger.info(f"Read {consumed} words from {path} in {time.perf_counter() - start_time:0.4f} seconds")

    return skipped


def write_modelfile(chain: Chain, path: str):
    """ Writes `chain` to `path`, creating the parent directory if needed. """
    directory = os.path.dirname(path)
    try:
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding=settings.ENCODING) as f:
            modelfile.dump(chain, f)
    except OSError as e:
        raise IOFailure(path, str(e)) from e
    logger.info(f"Markov model with {len(chain)} prefixes has been saved as '{path}'.")


def read_modelfile(path: str) -> Chain:
    """ Loads a chain from the modelfile at `path`. """
    start_time = time.perf_counter()
    try:
        with open(path, "r", encoding=settings.ENCODING) as f:
            chain = modelfile.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise IOFailure(path, str(e)) from e
    logger.info(f"Time taken to load the model: {time.perf_counter() - start_time:0.4f} seconds")
    return chain
