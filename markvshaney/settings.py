# markvshaney settings

# Modelfile format
EMPTY_TOKEN_LITERAL = '""'  # written in place of an empty (padding) token
FIELD_SEPARATOR = " "
ENCODING = "utf-8"

# Build
DEFAULT_PREFIX_LEN = 2
SKIP_UNREADABLE_INPUTS = True  # log and continue when an input file can't be opened

# Where models land when only a name is given
MODELS_DIR = "markov_models"

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
