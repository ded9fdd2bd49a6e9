"""Errors raised while turning intents into unsigned transactions."""


class BuildError(ValueError):
    """Raised when an intent cannot be turned into a transaction payload."""


class UnsupportedChain(BuildError):
    """Raised when a chain is outside the supported set for an operation."""


class UnsupportedFeeTier(BuildError):
    """Raised when a pool fee tier has no tick spacing."""
