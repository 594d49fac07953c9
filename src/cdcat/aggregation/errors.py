"""Errors raised while summarizing simulation results."""


class SummaryError(ValueError):
    """Base class for summary aggregation failures."""


class MissingReferenceError(SummaryError):
    """A reference attribute pattern is required to compare records."""


class LabelLengthMismatchError(SummaryError):
    """The number of labels differs from the number of records."""


class InconsistentModeError(SummaryError):
    """Records mix fixed-length and variable-length applications."""


class EmptyInputError(SummaryError):
    """No records were given to compare."""
