"""USDC treasury operations: transfers, allowances, budgets and CCTP bridging."""

from token_math.amounts import InvalidAmount, format_usdc, from_base_units, parse_usdc

from .abis import CCTP_TOKEN_MESSENGER_ABI, ERC20_ABI
from .chains import (
    CCTP_DOMAINS,
    CCTP_TOKEN_MESSENGERS,
    USDC_ADDRESSES,
    Chain,
    chain_id_for,
    lookup,
    parse_chain,
)
from .encoding import address_to_bytes32, checksum, encode_call, short_address
from .errors import BuildError, UnsupportedChain
from .intents import ApproveIntent, BridgeIntent, DisburseIntent, TransferIntent
from .models import BalanceResult, BridgeEstimate, ContractCall, PreparedTx


def get_usdc_balance_call(address: str, chain: str) -> ContractCall:
    resolved = parse_chain(chain)
    usdc = lookup(USDC_ADDRESSES, resolved, "USDC")
    data = encode_call(ERC20_ABI, "balanceOf", [checksum(address, "address")])
    return ContractCall(to=usdc, data=data, chain_id=chain_id_for(resolved))


def parse_balance_result(result: str, chain: str) -> BalanceResult:
    """Decode the raw ``balanceOf`` return word."""

    resolved = parse_chain(chain)
    try:
        balance = int(result, 16) if result not in ("0x", "") else 0
    except (TypeError, ValueError) as exc:
        raise BuildError(f"Balance result is not hex: {result!r}") from exc
    return BalanceResult(balance=balance, formatted=format_usdc(balance), chain=resolved.value)


def transfer_usdc(intent: TransferIntent) -> PreparedTx:
    chain = parse_chain(intent.chain)
    recipient = checksum(intent.to, "to")
    amount = require_positive_usdc(intent.amount)
    usdc = lookup(USDC_ADDRESSES, chain, "USDC")

    return PreparedTx(
        to=usdc,
        data=encode_call(ERC20_ABI, "transfer", [recipient, amount]),
        value=0,
        chain_id=chain_id_for(chain),
        description=(
            f"Transfer {from_base_units(amount, 6)} USDC to {short_address(recipient)}"
        ),
    )


def approve_usdc(intent: ApproveIntent) -> PreparedTx:
    chain = parse_chain(intent.chain)
    spender = checksum(intent.spender, "spender")
    amount = require_positive_usdc(intent.amount)
    usdc = lookup(USDC_ADDRESSES, chain, "USDC")

    return PreparedTx(
        to=usdc,
        data=encode_call(ERC20_ABI, "approve", [spender, amount]),
        value=0,
        chain_id=chain_id_for(chain),
        description=(
            f"Approve {from_base_units(amount, 6)} USDC for {short_address(spender)}"
        ),
    )


def bridge_usdc(intent: BridgeIntent) -> PreparedTx:
    """Burn USDC on the source chain for minting on the destination domain."""

    source = parse_chain(intent.source_chain)
    destination = parse_chain(intent.destination_chain)
    if source == destination:
        raise BuildError("Bridge source and destination chains must differ.")

    messenger = lookup(CCTP_TOKEN_MESSENGERS, source, "CCTP token messenger")
    destination_domain = lookup(CCTP_DOMAINS, destination, "CCTP domain")
    usdc = lookup(USDC_ADDRESSES, source, "USDC")
    recipient = checksum(intent.recipient, "recipient")
    amount = require_positive_usdc(intent.amount)

    data = encode_call(
        CCTP_TOKEN_MESSENGER_ABI,
        "depositForBurn",
        [amount, destination_domain, address_to_bytes32(recipient), usdc],
    )
    return PreparedTx(
        to=messenger,
        data=data,
        value=0,
        chain_id=chain_id_for(source),
        description=(
            f"Bridge {from_base_units(amount, 6)} USDC from {source.value} "
            f"to {destination.value}"
        ),
    )


def disburse_budget(intent: DisburseIntent) -> PreparedTx:
    """Treasury payout to a squad, always settled on Base."""

    transfer = transfer_usdc(
        TransferIntent(to=intent.squad_address, amount=intent.amount, chain=Chain.BASE.value)
    )
    amount = parse_usdc(intent.amount)
    return PreparedTx(
        to=transfer.to,
        data=transfer.data,
        value=transfer.value,
        chain_id=transfer.chain_id,
        description=(
            f"Disburse {from_base_units(amount, 6)} USDC to squad: {intent.description}"
        ),
    )


def estimate_bridge_fee(amount: str, source_chain: str, destination_chain: str) -> BridgeEstimate:
    """CCTP charges no protocol fee; the estimate validates the route."""

    source = parse_chain(source_chain)
    destination = parse_chain(destination_chain)
    for chain in (source, destination):
        if chain not in CCTP_DOMAINS:
            raise UnsupportedChain(f"CCTP domain is not available on {chain.value}.")
    amount_units = require_positive_usdc(amount)
    return BridgeEstimate(
        amount=amount_units,
        fee=0,
        net_amount=amount_units,
        destination_chain=destination.value,
    )


def require_positive_usdc(amount: str) -> int:
    units = parse_usdc(amount)
    if units <= 0:
        raise InvalidAmount("USDC amount must be positive.")
    return units
