"""
Error taxonomy for Quotebox.

No error is fatal to the process: callers either report it to the user
or log it, and the store is always left in its prior state.
"""


class QuoteboxError(Exception):
    """Base class for all Quotebox errors."""


class ValidationError(QuoteboxError, ValueError):
    """A quote was rejected because its text or category is empty."""


class FormatError(QuoteboxError, ValueError):
    """Stored, session or imported JSON is malformed."""


class TransportError(QuoteboxError):
    """A remote fetch or push failed."""
