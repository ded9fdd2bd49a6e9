"""Collaborators the engine consumes but never implements."""

from typing import Protocol

from tx_adapter.evm.models import ContractCall, PreparedTx


class SignerRejectedError(RuntimeError):
    """Raised by a signer when a transaction is refused or cannot be submitted."""


class Signer(Protocol):
    def submit(self, tx: PreparedTx) -> str:
        """Submit ``tx`` and return its transaction hash."""
        ...


class ContractReader(Protocol):
    def call(self, call: ContractCall) -> bytes:
        ...


class IdentityResolver(Protocol):
    def is_available(self, name: str) -> bool:
        ...
