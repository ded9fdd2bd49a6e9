"""Typed intents accepted by the transaction builders."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Intent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)


class TransferIntent(Intent):
    to: str
    amount: str
    chain: str = "base"


class ApproveIntent(Intent):
    spender: str
    amount: str
    chain: str = "base"


class BridgeIntent(Intent):
    amount: str
    recipient: str
    source_chain: str
    destination_chain: str


class DisburseIntent(Intent):
    squad_address: str
    amount: str
    description: str


class PoolInitIntent(Intent):
    token: str
    quote_token: str
    fee_tier: int
    initial_price: Optional[str] = None
    sqrt_price_x96: Optional[int] = Field(default=None, gt=0)
    hooks: Optional[str] = None
    chain: str = "base"

    @model_validator(mode="after")
    def _one_price(self) -> "PoolInitIntent":
        if (self.initial_price is None) == (self.sqrt_price_x96 is None):
            raise ValueError("Provide exactly one of initial_price or sqrt_price_x96.")
        return self


class SwapIntent(Intent):
    token_in: str
    token_out: str
    amount_in: int = Field(gt=0)
    min_amount_out: int = Field(default=0, ge=0)
    fee_tier: int
    hooks: Optional[str] = None
    chain: str = "base"


class BuybackIntent(Intent):
    """Buyback of the project token with USDC.

    The minimum output is either given directly or derived from a caller-side
    quote (``expected_consul_out``) and a slippage tolerance.
    """

    buyback_contract: str
    consul_token: str
    usdc_amount: str
    min_consul_out: Optional[int] = Field(default=None, ge=0)
    expected_consul_out: Optional[int] = Field(default=None, ge=0)
    slippage_bps: int = Field(default=50, ge=0, le=10_000)
    chain: str = "base"

    @model_validator(mode="after")
    def _one_bound(self) -> "BuybackIntent":
        if (self.min_consul_out is None) == (self.expected_consul_out is None):
            raise ValueError("Provide exactly one of min_consul_out or expected_consul_out.")
        return self


class IdentityIntent(Intent):
    label: str
    owner: str
    parent_domain: str = "consul.eth"
    resolver: Optional[str] = None
    chain: str = "sepolia"


class IdentityTextIntent(Intent):
    name: str
    key: str
    value: str
    resolver: Optional[str] = None
    chain: str = "sepolia"


class BudgetIntent(Intent):
    hub_dao: str
    amount: str
    chain: str = "base"


class VestingIntent(Intent):
    hook: str
    token: str
    quote_token: str
    fee_tier: int
    founder: str
    cliff_seconds: int = Field(ge=0)
    vesting_seconds: int = Field(gt=0)
    total_locked: int = Field(gt=0)
    chain: str = "base"


class BudgetVoteIntent(Intent):
    hub_dao: str
    quarter: int = Field(gt=0)
    support: bool = True
    chain: str = "base"


class BudgetApprovalIntent(Intent):
    hub_dao: str
    quarter: int = Field(gt=0)
    chain: str = "base"


class BudgetExecutionIntent(Intent):
    hub_dao: str
    quarter: int = Field(gt=0)
    recipient: str
    amount: str
    chain: str = "base"


class HubQueryIntent(Intent):
    hub_dao: str
    chain: str = "base"


class BalanceQueryIntent(Intent):
    address: str
    chain: str = "base"


class BalanceReadingIntent(Intent):
    """Raw ``balanceOf`` return data as 0x-prefixed hex."""

    result: str
    chain: str = "base"


class BridgeFeeIntent(Intent):
    amount: str
    source_chain: str
    destination_chain: str


class BuybackQuoteIntent(Intent):
    buyback_contract: str
    usdc_amount: str
    chain: str = "base"


class BuybackStatsIntent(Intent):
    buyback_contract: str
    chain: str = "base"


class BuybackEstimateIntent(Intent):
    usdc_in: int = Field(gt=0)
    consul_out: int = Field(gt=0)
    current_price: float = Field(gt=0)


class PoolKeyIntent(Intent):
    token_a: str
    token_b: str
    fee_tier: int
    hooks: Optional[str] = None


class PriceIntent(Intent):
    price: str


class SqrtPriceIntent(Intent):
    sqrt_price_x96: int = Field(gt=0)


class MinOutputIntent(Intent):
    expected_output: int = Field(ge=0)
    slippage_bps: int = Field(default=50, ge=0, le=10_000)


class IdentityOwnerIntent(Intent):
    name: str
    chain: str = "sepolia"
