"""EVM adapter models for unsigned payloads, read calls and estimates."""

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class PreparedTx:
    to: str
    data: str
    value: int
    chain_id: int
    description: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class ContractCall:
    """View-only call handed to a contract reader."""

    to: str
    data: str
    chain_id: int

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class PoolKey:
    currency0: str
    currency1: str
    fee: int
    tick_spacing: int
    hooks: str

    def as_tuple(self):
        return (self.currency0, self.currency1, self.fee, self.tick_spacing, self.hooks)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class BalanceResult:
    balance: int
    formatted: str
    chain: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class BridgeEstimate:
    amount: int
    fee: int
    net_amount: int
    destination_chain: str

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class BuybackEstimate:
    usdc_in: int
    consul_out: int
    price_impact: float
    effective_price: float

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)
