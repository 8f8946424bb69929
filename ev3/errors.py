"""Exception hierarchy for the ev3 binding."""


class Ev3Error(RuntimeError):
    """Base class for every error raised by this package."""
    pass


class NotFoundError(Ev3Error):
    """Raised when a lookup yields no matching device instance."""
    pass


class MultipleMatchesError(Ev3Error):
    """Raised when a lookup that must be unambiguous yields several matches."""
    def __init__(self, message, names):
        super().__init__(message)
        self.names = names  # list[str] of candidate instance names


class InternalError(Ev3Error):
    """Wraps I/O, text-decoding and value-parsing failures."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
