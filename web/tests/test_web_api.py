"""Smoke tests for the incubator web API."""

import unittest

try:
    from fastapi.testclient import TestClient
except ImportError:  # pragma: no cover - optional dependency
    TestClient = None

try:
    from web import app as web_app
except ImportError:  # pragma: no cover - optional dependency
    web_app = None
from incubation_engine import IncubatorSettings

FOUNDER = "0x" + "70" * 20


@unittest.skipIf(TestClient is None or web_app is None, "FastAPI not available")
class WebApiTests(unittest.TestCase):
    def setUp(self) -> None:
        web_app._reset_state(IncubatorSettings())
        self.client = TestClient(web_app.app)

    def _configured_session(self) -> str:
        created = self.client.post(
            "/api/sessions", json={"founder": FOUNDER, "project_name": "Moon DAO"}
        )
        self.assertEqual(created.status_code, 200)
        session_id = created.json()["session"]["id"]
        for text in ("moon-dao", "$10,000", "12 months", "confirm"):
            response = self.client.post(
                f"/api/sessions/{session_id}/messages", json={"text": text}
            )
            self.assertEqual(response.status_code, 200)
        return session_id

    def test_health_and_tools(self) -> None:
        health = self.client.get("/health")
        self.assertEqual(health.status_code, 200)
        self.assertEqual(health.json()["status"], "ok")

        tools = self.client.get("/api/tools").json()["tools"]
        groups = {tool["name"]: tool["group"] for tool in tools}
        self.assertEqual(groups["execute_swap"], "pools")
        self.assertEqual(groups["register_identity"], "incubation")
        kinds = {tool["name"]: tool["kind"] for tool in tools}
        self.assertEqual(kinds["get_vesting_status"], "read")
        self.assertEqual(kinds["compute_pool_id"], "helper")
        self.assertEqual(kinds["approve_budget"], "write")

    def test_invoke_tool(self) -> None:
        response = self.client.post(
            "/api/tools/bridge_usdc",
            json={
                "amount": "1,000",
                "source_chain": "base",
                "destination_chain": "arbitrum",
                "recipient": "0x" + "33" * 20,
            },
        )
        self.assertEqual(response.status_code, 200)
        transactions = response.json()["transactions"]
        self.assertEqual(len(transactions), 1)
        self.assertEqual(transactions[0]["chain_id"], 8453)

    def test_invoke_read_and_helper_tools(self) -> None:
        balance = self.client.post(
            "/api/tools/get_hub_treasury_balance", json={"hub_dao": "0x" + "66" * 20}
        ).json()
        self.assertEqual(balance["kind"], "read")
        self.assertEqual(balance["result"]["chain_id"], 8453)
        self.assertTrue(balance["result"]["data"].startswith("0x"))

        estimate = self.client.post(
            "/api/tools/estimate_buyback",
            json={"usdc_in": 1_000_000, "consul_out": 2 * 10**18, "current_price": 0.5},
        ).json()
        self.assertEqual(estimate["kind"], "helper")
        self.assertAlmostEqual(estimate["result"]["effective_price"], 0.5)

    def test_invoke_errors(self) -> None:
        missing = self.client.post("/api/tools/print_money", json={})
        self.assertEqual(missing.status_code, 404)

        invalid = self.client.post("/api/tools/transfer_usdc", json={"to": "nope", "amount": "1"})
        self.assertEqual(invalid.status_code, 400)
        self.assertIn("not a valid address", invalid.json()["error"])

    def test_pipeline_next(self) -> None:
        response = self.client.post(
            "/api/pipeline/next", json={"completed": ["mint_identity", "setup_treasury"]}
        )
        self.assertEqual(response.json(), {"next_action": "open_channel"})

        done = self.client.post(
            "/api/pipeline/next",
            json={
                "completed": [
                    "mint_identity",
                    "setup_treasury",
                    "open_channel",
                    "approve_budget",
                    "deploy_pool",
                    "lock_liquidity",
                ]
            },
        )
        self.assertIsNone(done.json()["next_action"])

    def test_start_session_from_message(self) -> None:
        response = self.client.post(
            "/api/sessions",
            json={"founder": FOUNDER, "message": 'I want to launch "Orbit Labs"'},
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["session"]["project_name"], "Orbit Labs")
        self.assertEqual(payload["session"]["stage"], "applied")
        self.assertIn("Orbit Labs", payload["response"]["message"])

    def test_action_lifecycle(self) -> None:
        session_id = self._configured_session()
        session = self.client.get(f"/api/sessions/{session_id}").json()
        self.assertEqual(session["stage"], "screening")
        self.assertEqual(session["config"]["treasury_display"], "$10,000.00")

        started = self.client.post(
            f"/api/sessions/{session_id}/messages", json={"text": "continue"}
        ).json()
        action = started["response"]["action"]
        self.assertEqual(action["type"], "mint_identity")
        self.assertEqual(action["status"], "pending")
        self.assertEqual(len(started["response"]["transactions"]), 1)

        submitted = self.client.post(
            f"/api/sessions/{session_id}/actions/{action['id']}/submitted",
            json={"tx_hash": "0x" + "ab" * 32},
        )
        self.assertEqual(submitted.json()["action"]["status"], "executing")

        confirmed = self.client.post(
            f"/api/sessions/{session_id}/actions/{action['id']}/confirm", json={}
        ).json()
        self.assertEqual(confirmed["action"]["status"], "completed")
        self.assertEqual(confirmed["action"]["tx_hash"], "0x" + "ab" * 32)
        self.assertEqual(confirmed["session"]["identity_name"], "moon-dao.consul.eth")
        self.assertTrue(confirmed["session"]["identity_registered"])

        again = self.client.post(
            f"/api/sessions/{session_id}/actions/{action['id']}/confirm", json={}
        )
        self.assertEqual(again.status_code, 400)

    def test_missing_configuration_fails_action(self) -> None:
        session_id = self._configured_session()
        first = self.client.post(
            f"/api/sessions/{session_id}/messages", json={"text": "continue"}
        ).json()["response"]["action"]
        self.client.post(f"/api/sessions/{session_id}/actions/{first['id']}/confirm", json={})

        treasury = self.client.post(
            f"/api/sessions/{session_id}/messages", json={"text": "continue"}
        ).json()["response"]
        self.assertEqual(treasury["action"]["type"], "setup_treasury")
        self.assertEqual(treasury["action"]["status"], "failed")
        self.assertIn("not configured", treasury["action"]["error"])
        self.assertEqual(treasury["transactions"], [])

    def test_fail_and_reset(self) -> None:
        session_id = self._configured_session()
        action = self.client.post(
            f"/api/sessions/{session_id}/messages", json={"text": "continue"}
        ).json()["response"]["action"]

        blank = self.client.post(
            f"/api/sessions/{session_id}/actions/{action['id']}/fail", json={"error": " "}
        )
        self.assertEqual(blank.status_code, 400)

        reset = self.client.post(f"/api/sessions/{session_id}/reset").json()
        self.assertEqual([item["id"] for item in reset["cancelled"]], [action["id"]])
        self.assertEqual(reset["session"]["actions"][0]["status"], "failed")

        retry = self.client.post(
            f"/api/sessions/{session_id}/messages", json={"text": "continue"}
        ).json()["response"]["action"]
        self.assertEqual(retry["type"], "mint_identity")
        self.assertNotEqual(retry["id"], action["id"])

    def test_unknown_session(self) -> None:
        response = self.client.get("/api/sessions/session_missing")
        self.assertEqual(response.status_code, 404)
        self.assertIn("session_missing", response.json()["error"])


if __name__ == "__main__":
    unittest.main()
