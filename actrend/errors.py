# actrend/errors.py
"""Exceptions raised by the trend core."""


class TrendError(Exception):
    """Base class for all trend-analysis errors."""


class IngestionError(TrendError):
    """The uploaded file cannot be turned into a dataset.

    The message is meant to be shown to the user as-is.
    """


class GraphBuildError(TrendError):
    """A flow graph cannot be built for the requested years."""


class YearSelectionError(TrendError):
    """A year selection change would leave fewer than the minimum years."""
