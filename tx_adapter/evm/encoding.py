"""ABI encoding and address helpers shared by the builders."""

from typing import Any, List, Sequence

from eth_utils import is_address, to_checksum_address
from web3 import Web3
from web3.exceptions import Web3Exception

from .errors import BuildError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Offline instance; only used to build calldata, never to reach a node.
_WEB3 = Web3()


def encode_call(abi: List[dict], function_name: str, args: Sequence[Any]) -> str:
    """Return 0x-prefixed calldata for ``function_name(*args)`` under ``abi``."""

    contract = _WEB3.eth.contract(abi=abi)
    try:
        data = contract.encode_abi(function_name, args=list(args))
    except (TypeError, ValueError, Web3Exception) as exc:
        raise BuildError(f"Cannot encode {function_name}: {exc}") from exc
    return _to_hex(data)


def checksum(address: str, label: str) -> str:
    if not isinstance(address, str) or not address.startswith("0x") or not is_address(address):
        raise BuildError(f"{label} is not a valid address: {address!r}")
    return to_checksum_address(address)


def require_deployed(address: str, label: str) -> str:
    checked = checksum(address, label)
    if checked == ZERO_ADDRESS:
        raise BuildError(f"{label} is not deployed.")
    return checked


def address_to_bytes32(address: str) -> bytes:
    """Left-pad a 20-byte address into the 32-byte form CCTP expects."""

    return bytes(12) + bytes.fromhex(checksum(address, "address")[2:])


def short_address(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}"


def _to_hex(data: Any) -> str:
    if isinstance(data, (bytes, bytearray)):
        return "0x" + bytes(data).hex()
    text = str(data)
    return text if text.startswith("0x") else "0x" + text
