class MarkovError(Exception):
    """ Base class for every error raised by markvshaney. """


class InvalidFormat(MarkovError, ValueError):
    """ A modelfile (or imported model) could not be parsed. """

    def __init__(self, message: str, line_number: int = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class InvalidArgument(MarkovError, ValueError):
    """ A count or length supplied by the caller is out of range. """


class IOFailure(MarkovError, OSError):
    """ An input or output file could not be opened, read or written. """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
