"""Exceptions raised by the search core."""


class SearchError(Exception):
    """Base class for every error raised by the search core."""


class EvaluationError(SearchError):
    """The position cannot be scored (e.g. the maximizing side has no king)."""


class SearchCancelled(SearchError):
    """Raised inside an abandoned worker once its stop event is set."""


class SearchFailure(SearchError):
    """Unexpected failure while running a search. Fatal for the session."""


class ValidationTimeout(SearchError):
    """The shadow validator did not finish both searches before its deadline."""
