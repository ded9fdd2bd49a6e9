"""Incubator settings, read from ``INCUBATOR_*`` environment variables."""

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, TypeVar

from tx_adapter.evm.chains import parse_chain
from tx_adapter.evm.pool_key import TICK_SPACING

_T = TypeVar("_T")

ENV_PREFIX = "INCUBATOR_"


@dataclass(frozen=True)
class IncubatorSettings:
    parent_domain: str = "consul.eth"
    treasury_min: int = 1_000
    treasury_max: int = 10_000_000
    vesting_min_months: int = 6
    vesting_max_months: int = 48
    liquidity_percent: int = 20
    cliff_months: int = 3
    pool_fee_tier: int = 3000
    initial_price: str = "0.01"
    token_supply: int = 1_000_000_000
    chain: str = "base_sepolia"
    identity_chain: str = "sepolia"
    treasury_address: Optional[str] = None
    hub_dao_address: Optional[str] = None
    channel_custody_address: Optional[str] = None
    project_token_address: Optional[str] = None
    buyback_address: Optional[str] = None
    anti_rug_hook_address: Optional[str] = None
    ens_resolver_address: Optional[str] = None
    budget_quarter: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0 < self.treasury_min <= self.treasury_max:
            raise ValueError("Treasury bounds must satisfy 0 < min <= max.")
        if not 0 < self.vesting_min_months <= self.vesting_max_months:
            raise ValueError("Vesting bounds must satisfy 0 < min <= max.")
        if not 1 <= self.liquidity_percent <= 100:
            raise ValueError("Liquidity percent must be between 1 and 100.")
        if self.cliff_months < 0:
            raise ValueError("Cliff months cannot be negative.")
        if self.pool_fee_tier not in TICK_SPACING:
            raise ValueError(f"Unsupported pool fee tier: {self.pool_fee_tier}")
        if self.token_supply <= 0:
            raise ValueError("Token supply must be positive.")
        if not self.parent_domain:
            raise ValueError("Parent domain is required.")
        if self.budget_quarter is not None and self.budget_quarter <= 0:
            raise ValueError("Budget quarter must be positive.")
        parse_chain(self.chain)
        parse_chain(self.identity_chain)

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "IncubatorSettings":
        env = os.environ if environ is None else environ
        defaults = IncubatorSettings()

        def read(name: str, default: _T, convert: Callable[[str], _T]) -> _T:
            raw = env.get(ENV_PREFIX + name)
            if raw is None or raw.strip() == "":
                return default
            try:
                return convert(raw.strip())
            except ValueError as exc:
                raise ValueError(f"{ENV_PREFIX}{name} is invalid: {raw!r}") from exc

        def address(name: str) -> Optional[str]:
            raw = env.get(ENV_PREFIX + name)
            return raw.strip() if raw and raw.strip() else None

        return IncubatorSettings(
            parent_domain=read("PARENT_DOMAIN", defaults.parent_domain, str.lower),
            treasury_min=read("TREASURY_MIN", defaults.treasury_min, int),
            treasury_max=read("TREASURY_MAX", defaults.treasury_max, int),
            vesting_min_months=read("VESTING_MIN_MONTHS", defaults.vesting_min_months, int),
            vesting_max_months=read("VESTING_MAX_MONTHS", defaults.vesting_max_months, int),
            liquidity_percent=read("LIQUIDITY_PERCENT", defaults.liquidity_percent, int),
            cliff_months=read("CLIFF_MONTHS", defaults.cliff_months, int),
            pool_fee_tier=read("POOL_FEE_TIER", defaults.pool_fee_tier, int),
            initial_price=read("INITIAL_PRICE", defaults.initial_price, str),
            token_supply=read("TOKEN_SUPPLY", defaults.token_supply, int),
            chain=read("CHAIN", defaults.chain, str),
            identity_chain=read("IDENTITY_CHAIN", defaults.identity_chain, str),
            treasury_address=address("TREASURY_ADDRESS"),
            hub_dao_address=address("HUB_DAO_ADDRESS"),
            channel_custody_address=address("CHANNEL_CUSTODY_ADDRESS"),
            project_token_address=address("PROJECT_TOKEN_ADDRESS"),
            buyback_address=address("BUYBACK_ADDRESS"),
            anti_rug_hook_address=address("ANTI_RUG_HOOK_ADDRESS"),
            ens_resolver_address=address("ENS_RESOLVER_ADDRESS"),
            budget_quarter=read("BUDGET_QUARTER", defaults.budget_quarter, int),
        )
