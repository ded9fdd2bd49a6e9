import unittest
from dataclasses import replace

from eth_abi import decode

from tx_adapter.evm import BuildError, PreparedTx
from tx_adapter.evm.chains import ENS_REGISTRIES, USDC_ADDRESSES, Chain

from incubation_engine import (
    ActionType,
    IncubationConfig,
    IncubationPlanner,
    IncubatorSettings,
    Session,
    UnimplementedActionError,
    validate_prepared_tx,
)

FOUNDER = "0x" + "70" * 20
TREASURY = "0x" + "71" * 20
HUB = "0x" + "72" * 20
CUSTODY = "0x" + "73" * 20
TOKEN = "0x" + "74" * 20
HOOK = "0x" + "75" * 20

SETTINGS = IncubatorSettings(
    treasury_address=TREASURY,
    hub_dao_address=HUB,
    channel_custody_address=CUSTODY,
    project_token_address=TOKEN,
    anti_rug_hook_address=HOOK,
    liquidity_percent=10,
    cliff_months=1,
    token_supply=1_000,
)


def configured_session() -> Session:
    return Session(
        session_id="session_1",
        project_name="Moon",
        founder=FOUNDER,
        started_at="2026-01-01T00:00:00+00:00",
        config=IncubationConfig(
            identity_name="moon",
            treasury_amount=10_000_000_000,
            vesting_months=12,
            liquidity_percent=10,
        ),
    )


class IncubationPlannerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.planner = IncubationPlanner(SETTINGS)
        self.session = configured_session()

    def plan_one(self, action_type: ActionType) -> PreparedTx:
        transactions = self.planner.plan(action_type, self.session)
        self.assertEqual(len(transactions), 1)
        return transactions[0]

    def test_mint_identity_registers_subdomain(self) -> None:
        tx = self.plan_one(ActionType.MINT_IDENTITY)
        self.assertEqual(tx.to, ENS_REGISTRIES[Chain.SEPOLIA])
        self.assertEqual(tx.chain_id, 11155111)
        self.assertIn("moon.consul.eth", tx.description)

    def test_treasury_steps_use_configured_amount(self) -> None:
        treasury = self.plan_one(ActionType.SETUP_TREASURY)
        channel = self.plan_one(ActionType.OPEN_CHANNEL)
        budget = self.plan_one(ActionType.APPROVE_BUDGET)

        self.assertEqual(treasury.to, USDC_ADDRESSES[Chain.BASE_SEPOLIA])
        recipient, amount = decode(["address", "uint256"], bytes.fromhex(treasury.data[10:]))
        self.assertEqual(recipient.lower(), TREASURY)
        self.assertEqual(amount, 10_000_000_000)

        spender, allowance = decode(["address", "uint256"], bytes.fromhex(channel.data[10:]))
        self.assertEqual(spender.lower(), CUSTODY)
        self.assertEqual(allowance, 10_000_000_000)

        self.assertEqual(budget.to.lower(), HUB)
        self.assertEqual(budget.chain_id, 84532)

    def test_budget_quarter_switches_to_approval(self) -> None:
        planner = IncubationPlanner(replace(SETTINGS, budget_quarter=4))
        tx = planner.plan(ActionType.APPROVE_BUDGET, self.session)[0]
        self.assertEqual(tx.to.lower(), HUB)
        self.assertEqual(tx.description, "Approve the quarter 4 budget on HubDAO")
        self.assertEqual(decode(["uint256"], bytes.fromhex(tx.data[10:])), (4,))

        proposal = self.plan_one(ActionType.APPROVE_BUDGET)
        self.assertEqual(proposal.description, "Propose $10,000.00 budget to HubDAO")

    def test_pool_and_lock_share_the_hooked_pool(self) -> None:
        pool = self.plan_one(ActionType.DEPLOY_POOL)
        lock = self.plan_one(ActionType.LOCK_LIQUIDITY)

        key_type = "(address,address,uint24,int24,address)"
        pool_key, _ = decode([key_type, "uint160"], bytes.fromhex(pool.data[10:]))
        lock_key, founder, cliff, duration, locked = decode(
            [key_type, "address", "uint256", "uint256", "uint256"],
            bytes.fromhex(lock.data[10:]),
        )
        self.assertEqual(pool_key, lock_key)
        self.assertEqual(pool_key[4].lower(), HOOK)
        self.assertEqual(lock.to.lower(), HOOK)
        self.assertEqual(founder.lower(), FOUNDER)
        self.assertEqual(cliff, 30 * 86_400)
        self.assertEqual(duration, 12 * 30 * 86_400)
        self.assertEqual(locked, 100 * 10**18)

    def test_actions_outside_flow(self) -> None:
        for action_type in (ActionType.PROCESS_PAYMENT, ActionType.VERIFY_VESTING):
            with self.assertRaises(UnimplementedActionError):
                self.planner.plan(action_type, self.session)

    def test_missing_configuration(self) -> None:
        planner = IncubationPlanner(replace(SETTINGS, hub_dao_address=None))
        with self.assertRaises(BuildError):
            planner.plan(ActionType.APPROVE_BUDGET, self.session)

        self.session.config = IncubationConfig()
        with self.assertRaises(BuildError):
            self.planner.plan(ActionType.MINT_IDENTITY, self.session)


class PreparedTxValidationTests(unittest.TestCase):
    def valid(self) -> PreparedTx:
        return IncubationPlanner(SETTINGS).plan(ActionType.SETUP_TREASURY, configured_session())[0]

    def test_accepts_builder_output(self) -> None:
        validate_prepared_tx(self.valid())

    def test_rejects_malformed(self) -> None:
        tx = self.valid()
        for broken in (
            replace(tx, to=tx.to.lower()),
            replace(tx, data="a9059cbb"),
            replace(tx, data="0x12"),
            replace(tx, data="0xzzzzzzzz"),
            replace(tx, value=-1),
            replace(tx, chain_id=5),
            replace(tx, description=""),
        ):
            with self.assertRaises(BuildError):
                validate_prepared_tx(broken)


if __name__ == "__main__":
    unittest.main()
