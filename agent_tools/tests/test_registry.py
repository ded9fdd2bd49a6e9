"""Registry discovery and invocation tests."""

import unittest

from eth_utils import keccak

from tx_adapter.evm import BuildError, ContractCall, PreparedTx, TransferIntent

from agent_tools import (
    AGENT_TOOLS,
    TOOL_DESCRIPTIONS,
    TOOL_INTENTS,
    TOOL_KINDS,
    invoke,
    list_tools,
    serialize_result,
    tool_group,
)

RECIPIENT = "0x" + "11" * 20
BUYBACK = "0x" + "55" * 20
TOKEN = "0x" + "22" * 20
HUB = "0x" + "66" * 20


class ToolRegistryTests(unittest.TestCase):
    def test_every_tool_is_described_and_typed(self) -> None:
        grouped = {name for tools in AGENT_TOOLS.values() for name in tools}
        self.assertEqual(grouped, set(TOOL_DESCRIPTIONS))
        self.assertEqual(grouped, set(TOOL_INTENTS))
        self.assertEqual(grouped, set(TOOL_KINDS))
        self.assertEqual(set(TOOL_KINDS.values()), {"write", "read", "helper"})
        self.assertEqual(set(AGENT_TOOLS), {"treasury", "pools", "buyback", "incubation"})

    def test_list_tools_sorted(self) -> None:
        tools = list_tools()
        self.assertEqual(tools, sorted(tools))
        self.assertIn(("bridge_usdc", TOOL_DESCRIPTIONS["bridge_usdc"]), tools)

    def test_tables_are_read_only(self) -> None:
        with self.assertRaises(TypeError):
            TOOL_DESCRIPTIONS["rug_pull"] = "nope"  # type: ignore[index]
        with self.assertRaises(TypeError):
            AGENT_TOOLS["treasury"]["rug_pull"] = print  # type: ignore[index]

    def test_invoke_with_mapping(self) -> None:
        tx = invoke("transfer_usdc", {"to": RECIPIENT, "amount": "$250"})
        self.assertIsInstance(tx, PreparedTx)
        self.assertEqual(tx.chain_id, 8453)

    def test_invoke_with_intent_model(self) -> None:
        intent = TransferIntent(to=RECIPIENT, amount="250", chain="arbitrum")
        self.assertEqual(invoke("transfer_usdc", intent).chain_id, 42161)

    def test_buyback_tool_returns_ordered_pair(self) -> None:
        result = invoke(
            "prepare_buyback_with_approval",
            {
                "buyback_contract": BUYBACK,
                "consul_token": TOKEN,
                "usdc_amount": "$5,000",
                "expected_consul_out": 10**21,
            },
        )
        self.assertEqual(len(result), 2)
        self.assertTrue(result[0].description.startswith("Approve"))
        self.assertTrue(result[1].description.startswith("Buyback"))

    def test_read_and_helper_tools(self) -> None:
        quote = invoke("get_buyback_quote", {"buyback_contract": BUYBACK, "usdc_amount": "$1"})
        self.assertIsInstance(quote, ContractCall)
        self.assertEqual(quote.to.lower(), BUYBACK)
        self.assertEqual(TOOL_KINDS["get_buyback_quote"], "read")

        quarter = invoke("get_current_quarter", {"hub_dao": HUB})
        self.assertEqual(quarter.data, "0x" + keccak(text="currentQuarter()")[:4].hex())
        self.assertEqual(tool_group("get_current_quarter"), "incubation")

        fee = invoke(
            "estimate_bridge_fee",
            {"amount": "100", "source_chain": "base", "destination_chain": "arbitrum"},
        )
        self.assertEqual(serialize_result(fee)["net_amount"], fee.net_amount)
        self.assertEqual(TOOL_KINDS["estimate_bridge_fee"], "helper")

        self.assertEqual(invoke("calculate_min_output", {"expected_output": 10_000}), 9_950)

        forward = invoke("compute_pool_id", {"token_a": TOKEN, "token_b": RECIPIENT, "fee_tier": 3000})
        reverse = invoke("compute_pool_id", {"token_a": RECIPIENT, "token_b": TOKEN, "fee_tier": 3000})
        self.assertEqual(forward, reverse)
        self.assertEqual(serialize_result(forward), forward)

    def test_governance_and_manifest_tools(self) -> None:
        vote = invoke("vote_on_budget", {"hub_dao": HUB, "quarter": 3, "support": False})
        self.assertEqual(vote.description, "Vote against the quarter 3 budget")

        records = invoke(
            "publish_project_manifest",
            {
                "name": "defi-hub.consul.eth",
                "manifest": {
                    "name": "DeFi Hub",
                    "founder": RECIPIENT,
                    "createdAt": "2026-01-01T00:00:00Z",
                    "stage": "incubating",
                },
            },
        )
        self.assertEqual(len(records), 3)
        self.assertEqual(len(serialize_result(records)), 3)
        self.assertEqual(TOOL_KINDS["publish_project_manifest"], "write")

        with self.assertRaises(BuildError):
            invoke("approve_budget", {"hub_dao": HUB, "quarter": 0})

    def test_unknown_and_malformed(self) -> None:
        with self.assertRaises(BuildError):
            invoke("mint_money", {})
        with self.assertRaises(BuildError):
            invoke("transfer_usdc", {"to": RECIPIENT})
        with self.assertRaises(BuildError):
            invoke("transfer_usdc", {"to": RECIPIENT, "amount": "1", "memo": "x"})
        with self.assertRaises(BuildError):
            invoke("transfer_usdc", ["not", "a", "mapping"])
        with self.assertRaises(BuildError):
            tool_group("mint_money")
        self.assertEqual(tool_group("initialize_vesting"), "incubation")


if __name__ == "__main__":
    unittest.main()
