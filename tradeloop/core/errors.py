"""
Unified exception hierarchy for tradeloop.

All exceptions inherit from TradeError. Transient transport failures are
never raised; they surface as ``None`` / ``False`` return values. Only
fatal conditions that must end the session are raised as TradeAbortedError.
"""


class TradeError(Exception):
    """Base exception for all tradeloop errors."""
    pass


class TransportError(TradeError):
    """Transport misconfiguration (missing session id, bad base URL, etc.)."""
    pass


class ConfigError(TradeError):
    """Configuration error (invalid env values, missing collaborators, etc.)."""
    pass


class TradeAbortedError(TradeError):
    """The session is unrecoverable. Do not retry, do not keep polling."""
    pass


class VersionMismatchError(TradeAbortedError):
    """A snapshot skipped ahead of the local version without a full-state replace."""
    pass


class LedgerValidationError(TradeAbortedError):
    """The local offer ledger disagrees with the server-confirmed offer."""
    pass
