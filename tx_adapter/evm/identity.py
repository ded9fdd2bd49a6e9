"""ENS subdomain identities for incubated projects."""

import re
from typing import Optional

from ens.exceptions import InvalidName
from ens.utils import normalize_name as ensip15_normalize
from eth_utils import keccak

from .abis import ENS_REGISTRY_ABI, ENS_RESOLVER_ABI
from .chains import ENS_PUBLIC_RESOLVERS, ENS_REGISTRIES, chain_id_for, lookup, parse_chain
from .encoding import checksum, encode_call, short_address
from .errors import BuildError
from .intents import IdentityIntent, IdentityTextIntent
from .models import ContractCall, PreparedTx

LABEL_PATTERN = re.compile(r"^[a-z0-9-]{3,32}$")


def label_problem(label: str) -> Optional[str]:
    """Explain why ``label`` cannot be a project subdomain, or return None."""

    if len(label) < 3:
        return "Name must be at least 3 characters."
    if len(label) > 32:
        return "Name must be 32 characters or less."
    if not LABEL_PATTERN.match(label):
        return "Name can only contain lowercase letters, numbers, and hyphens."
    if label.startswith("-") or label.endswith("-"):
        return "Name cannot start or end with a hyphen."
    return None


def normalize_name(name: str) -> str:
    """ENSIP-15 normalization using the ``ens`` package bundled with web3."""

    stripped = name.strip().rstrip(".")
    if not stripped:
        raise BuildError(f"Invalid ENS name: {name!r}")
    try:
        return ensip15_normalize(stripped)
    except (InvalidName, ValueError) as exc:
        raise BuildError(f"Invalid ENS name: {name!r}") from exc


def namehash(name: str) -> bytes:
    """EIP-137 namehash over an already-normalized name."""

    node = bytes(32)
    if name:
        for label in reversed(name.split(".")):
            node = keccak(node + labelhash(label))
    return node


def labelhash(label: str) -> bytes:
    return keccak(text=label)


def identity_name(label: str, parent_domain: str) -> str:
    return f"{label}.{normalize_name(parent_domain)}"


def register_identity(intent: IdentityIntent) -> PreparedTx:
    """Create ``<label>.<parent>`` owned by the founder, with a resolver set."""

    chain = parse_chain(intent.chain)
    registry = lookup(ENS_REGISTRIES, chain, "ENS registry")
    problem = label_problem(intent.label)
    if problem:
        raise BuildError(problem)
    parent = normalize_name(intent.parent_domain)
    owner = checksum(intent.owner, "owner")
    resolver = _resolver(intent.resolver, chain)

    data = encode_call(
        ENS_REGISTRY_ABI,
        "setSubnodeRecord",
        [namehash(parent), labelhash(intent.label), owner, resolver, 0],
    )
    return PreparedTx(
        to=registry,
        data=data,
        value=0,
        chain_id=chain_id_for(chain),
        description=f"Register {intent.label}.{parent} for {short_address(owner)}",
    )


def set_identity_text(intent: IdentityTextIntent) -> PreparedTx:
    chain = parse_chain(intent.chain)
    name = normalize_name(intent.name)
    if not intent.key:
        raise BuildError("Text record key is required.")
    resolver = _resolver(intent.resolver, chain)

    return PreparedTx(
        to=resolver,
        data=encode_call(ENS_RESOLVER_ABI, "setText", [namehash(name), intent.key, intent.value]),
        value=0,
        chain_id=chain_id_for(chain),
        description=f"Set {intent.key} record on {name}",
    )


def get_identity_owner_call(name: str, chain: str = "sepolia") -> ContractCall:
    resolved = parse_chain(chain)
    return ContractCall(
        to=lookup(ENS_REGISTRIES, resolved, "ENS registry"),
        data=encode_call(ENS_REGISTRY_ABI, "owner", [namehash(normalize_name(name))]),
        chain_id=chain_id_for(resolved),
    )


def _resolver(resolver: Optional[str], chain) -> str:
    if resolver:
        return checksum(resolver, "resolver")
    return lookup(ENS_PUBLIC_RESOLVERS, chain, "ENS public resolver")
