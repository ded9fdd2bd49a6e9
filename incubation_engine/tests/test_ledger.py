import unittest

from incubation_engine import Action, ActionLedger, ActionStatus, ActionType, LedgerError


def pending(action_id: str, action_type: ActionType = ActionType.MINT_IDENTITY) -> Action:
    return Action(
        action_id=action_id,
        action_type=action_type,
        status=ActionStatus.PENDING,
        description="test",
        timestamp="2026-01-01T00:00:00+00:00",
    )


class ActionLedgerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ledger = ActionLedger()

    def test_forward_transitions(self) -> None:
        self.ledger.append(pending("a1"))
        executing = self.ledger.transition("a1", ActionStatus.EXECUTING, tx_hash="0x01")
        self.assertEqual(executing.tx_hash, "0x01")

        completed = self.ledger.transition("a1", ActionStatus.COMPLETED, result="ok")
        self.assertEqual(completed.status, ActionStatus.COMPLETED)
        self.assertEqual(completed.tx_hash, "0x01")
        self.assertEqual(self.ledger.completed_types(), frozenset({ActionType.MINT_IDENTITY}))
        self.assertEqual(self.ledger.completed_count(), 1)
        self.assertIsNone(self.ledger.in_flight())

    def test_record_submission_only_while_executing(self) -> None:
        self.ledger.append(pending("a1"))
        with self.assertRaises(LedgerError):
            self.ledger.record_submission("a1", "0x02")

        self.ledger.transition("a1", ActionStatus.EXECUTING, tx_hash="0x01")
        updated = self.ledger.record_submission("a1", "0x02")
        self.assertEqual(updated.tx_hash, "0x02")
        self.assertEqual(updated.status, ActionStatus.EXECUTING)

        self.ledger.transition("a1", ActionStatus.COMPLETED)
        with self.assertRaises(LedgerError):
            self.ledger.record_submission("a1", "0x03")

    def test_terminal_actions_are_immutable(self) -> None:
        self.ledger.append(pending("a1"))
        self.ledger.transition("a1", ActionStatus.FAILED, error="rejected")
        for status in ActionStatus:
            with self.assertRaises(LedgerError):
                self.ledger.transition("a1", status)

    def test_no_skipping_or_going_back(self) -> None:
        self.ledger.append(pending("a1"))
        with self.assertRaises(LedgerError):
            self.ledger.transition("a1", ActionStatus.COMPLETED)
        self.ledger.transition("a1", ActionStatus.EXECUTING)
        with self.assertRaises(LedgerError):
            self.ledger.transition("a1", ActionStatus.PENDING)

    def test_one_action_in_flight(self) -> None:
        self.ledger.append(pending("a1"))
        with self.assertRaises(LedgerError):
            self.ledger.append(pending("a2", ActionType.SETUP_TREASURY))

        self.ledger.transition("a1", ActionStatus.FAILED, error="x")
        self.ledger.append(pending("a2", ActionType.MINT_IDENTITY))
        self.assertEqual([action.action_id for action in self.ledger], ["a1", "a2"])

    def test_append_rules(self) -> None:
        with self.assertRaises(LedgerError):
            self.ledger.append(
                Action(
                    action_id="a1",
                    action_type=ActionType.MINT_IDENTITY,
                    status=ActionStatus.COMPLETED,
                    description="forged",
                    timestamp="t",
                )
            )
        self.ledger.append(pending("a1"))
        self.ledger.transition("a1", ActionStatus.FAILED)
        with self.assertRaises(LedgerError):
            self.ledger.append(pending("a1"))
        with self.assertRaises(LedgerError):
            self.ledger.get("missing")

    def test_cancel_in_flight_keeps_completed(self) -> None:
        self.ledger.append(pending("a1"))
        self.ledger.transition("a1", ActionStatus.EXECUTING)
        self.ledger.transition("a1", ActionStatus.COMPLETED)
        self.ledger.append(pending("a2", ActionType.SETUP_TREASURY))

        cancelled = self.ledger.cancel_in_flight("Cancelled by reset")

        self.assertEqual([action.action_id for action in cancelled], ["a2"])
        self.assertEqual(self.ledger.get("a2").error, "Cancelled by reset")
        self.assertEqual(self.ledger.get("a1").status, ActionStatus.COMPLETED)
        self.assertEqual(self.ledger.cancel_in_flight("again"), ())
        self.assertEqual(len(self.ledger), 2)


if __name__ == "__main__":
    unittest.main()
