"""Canonical pool keys and pool identifiers."""

from types import MappingProxyType
from typing import Mapping, Optional

from eth_abi import encode
from eth_utils import keccak

from .encoding import ZERO_ADDRESS, checksum
from .errors import BuildError, UnsupportedFeeTier
from .models import PoolKey

# Fee in hundredths of a basis point -> tick spacing.
TICK_SPACING: Mapping[int, int] = MappingProxyType({500: 10, 3000: 60, 10000: 200})

_POOL_KEY_TYPES = ["address", "address", "uint24", "int24", "address"]


def tick_spacing_for(fee: int) -> int:
    if isinstance(fee, bool) or not isinstance(fee, int) or fee not in TICK_SPACING:
        raise UnsupportedFeeTier(
            f"Unsupported fee tier {fee!r}; expected one of {sorted(TICK_SPACING)}."
        )
    return TICK_SPACING[fee]


def create_pool_key(
    token_a: str,
    token_b: str,
    fee: int,
    hooks: Optional[str] = None,
) -> PoolKey:
    """Build the pool key for a pair, independent of the order given.

    Currencies are ordered by numeric address value so that two callers
    describing the same pool always produce the same key and pool id.
    """

    first = checksum(token_a, "token_a")
    second = checksum(token_b, "token_b")
    if int(first, 16) == int(second, 16):
        raise BuildError("A pool needs two distinct currencies.")
    spacing = tick_spacing_for(fee)
    hook_address = checksum(hooks, "hooks") if hooks else ZERO_ADDRESS

    currency0, currency1 = sorted((first, second), key=lambda address: int(address, 16))
    return PoolKey(
        currency0=currency0,
        currency1=currency1,
        fee=fee,
        tick_spacing=spacing,
        hooks=hook_address,
    )


def compute_pool_id(pool_key: PoolKey) -> str:
    """``keccak256(abi.encode(key))``, the identifier the pool manager uses."""

    encoded = encode(_POOL_KEY_TYPES, list(pool_key.as_tuple()))
    return "0x" + keccak(encoded).hex()
