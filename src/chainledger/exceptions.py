class ChainLedgerError(Exception):
    """Base error for chainledger."""


class ExternalServiceError(ChainLedgerError):
    """A block explorer or other remote API returned an error or garbage."""


class UnknownChainError(ChainLedgerError, ValueError):
    """No explorer API URL is known for the requested chain."""


class InvalidCsvError(ChainLedgerError, ValueError):
    """An input CSV could not be read or its type could not be detected."""
