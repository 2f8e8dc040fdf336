# gentrify/errors.py


class ValidationError(ValueError):
    """A required input was missing entirely. Signals a caller bug; never swallowed."""
