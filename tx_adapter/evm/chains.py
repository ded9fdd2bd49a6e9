"""Supported chains and the per-chain contract tables the builders target."""

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, TypeVar, Union

from eth_utils import to_checksum_address

from .errors import UnsupportedChain

_T = TypeVar("_T")


class Chain(Enum):
    ETHEREUM = "ethereum"
    SEPOLIA = "sepolia"
    BASE = "base"
    BASE_SEPOLIA = "base_sepolia"
    ARBITRUM = "arbitrum"
    POLYGON = "polygon"


CHAIN_IDS: Mapping[Chain, int] = MappingProxyType(
    {
        Chain.ETHEREUM: 1,
        Chain.SEPOLIA: 11155111,
        Chain.BASE: 8453,
        Chain.BASE_SEPOLIA: 84532,
        Chain.ARBITRUM: 42161,
        Chain.POLYGON: 137,
    }
)


def _checksummed(table: Dict[Chain, str]) -> Mapping[Chain, str]:
    return MappingProxyType(
        {chain: to_checksum_address(address) for chain, address in table.items()}
    )


USDC_ADDRESSES: Mapping[Chain, str] = _checksummed(
    {
        Chain.ETHEREUM: "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        Chain.SEPOLIA: "0x1c7d4b196cb0c7b01d743fbc6116a902379c7238",
        Chain.BASE: "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913",
        Chain.BASE_SEPOLIA: "0x036cbd53842c5426634e7929541ec2318f3dcf7e",
        Chain.ARBITRUM: "0xaf88d065e77c8cc2239327c5edb3a432268e5831",
        Chain.POLYGON: "0x3c499c542cef5e3811e1192ce70d8cc03d5c3359",
    }
)

# Circle CCTP: burn on the source messenger, mint on the destination domain.
CCTP_TOKEN_MESSENGERS: Mapping[Chain, str] = _checksummed(
    {
        Chain.ETHEREUM: "0xbd3fa81b58ba92a82136038b25adec7066af3155",
        Chain.BASE: "0x1682ae6375c4e4a97e4b583bc394c861a46d8962",
        Chain.ARBITRUM: "0x19330d10d9cc8751218eaf51e8885d058642e08a",
        Chain.POLYGON: "0x9daf8c91aefae50b9c0e69629d3f6ca40ca3b3fe",
    }
)

CCTP_DOMAINS: Mapping[Chain, int] = MappingProxyType(
    {
        Chain.ETHEREUM: 0,
        Chain.ARBITRUM: 3,
        Chain.BASE: 6,
        Chain.POLYGON: 7,
    }
)

POOL_MANAGERS: Mapping[Chain, str] = _checksummed(
    {
        Chain.BASE: "0x498581ff718922c3f8e6a244956af099b2652b2b",
        Chain.BASE_SEPOLIA: "0x05e73354cfdd6745c338b50bcfdfa3aa6fa03408",
    }
)

ENS_REGISTRIES: Mapping[Chain, str] = _checksummed(
    {
        Chain.ETHEREUM: "0x00000000000c2e074ec69a0dfb2997ba6c7d2e1e",
        Chain.SEPOLIA: "0x00000000000c2e074ec69a0dfb2997ba6c7d2e1e",
    }
)

ENS_PUBLIC_RESOLVERS: Mapping[Chain, str] = _checksummed(
    {
        Chain.ETHEREUM: "0x231b0ee14048e9dccd1d247744d114a4eb5e8e63",
        Chain.SEPOLIA: "0x8fade66b79cc9f707ab26799354482eb93a5b7dd",
    }
)


def parse_chain(value: Union[str, int, Chain]) -> Chain:
    """Resolve a chain from its enum, name (``base-sepolia``, ``baseSepolia``) or id."""

    if isinstance(value, Chain):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        for chain, chain_id in CHAIN_IDS.items():
            if chain_id == value:
                return chain
        raise UnsupportedChain(f"Unsupported chain id: {value}")
    if isinstance(value, str):
        normalized = value.strip().lower().replace("-", "").replace("_", "")
        if normalized.isdigit():
            return parse_chain(int(normalized))
        for chain in Chain:
            if chain.value.replace("_", "") == normalized:
                return chain
    raise UnsupportedChain(f"Unsupported chain: {value!r}")


def chain_id_for(chain: Chain) -> int:
    return CHAIN_IDS[chain]


def lookup(table: Mapping[Chain, _T], chain: Chain, purpose: str) -> _T:
    """Return the table entry for ``chain`` or fail with ``UnsupportedChain``."""

    try:
        return table[chain]
    except KeyError:
        raise UnsupportedChain(f"{purpose} is not available on {chain.value}.") from None
