# comparator/errors.py
"""Error kinds raised by the comparison and follow-up flows."""


class ComparatorError(Exception):
    """Base class for every failure the comparator surfaces to a caller."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InputInvalid(ComparatorError):
    """Missing or blank device names, or an empty follow-up question."""

    status_code = 400


class InvalidChatState(ComparatorError):
    """Chat history handed to the backend does not end on a user turn."""

    status_code = 400


class BackendUnavailable(ComparatorError):
    """The generation backend could not be reached or reported an error."""


class MalformedResponse(ComparatorError):
    """The backend answered, but not with the structured shape we asked for."""
