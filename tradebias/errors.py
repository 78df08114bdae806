"""Exceptions raised by TradeBias."""


class TradeBiasError(Exception):
    """Base class for TradeBias errors."""


class IngestError(TradeBiasError):
    """The trade file could not be read or lacks required columns."""


class ConfigError(TradeBiasError):
    """The configuration file exists but cannot be loaded."""
