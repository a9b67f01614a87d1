"""Custom Exceptions."""


class WMOParseError(Exception):
    """Raised when a bulletin does not follow its expected grammar."""

    def __init__(self, message, cause=None):
        """Constructor."""
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
