"""
Exceptions raised by the Translation Telephone game.
"""


class TelephoneGameError(Exception):
    """Base class for game errors."""


class InvalidPhraseError(TelephoneGameError, ValueError):
    """The phrase to pass along is missing or blank."""


class ChainValidationError(TelephoneGameError, ValueError):
    """The translation chain cannot be run."""


class UpdateListenerError(TelephoneGameError):
    """A progress listener raised while receiving a record."""
