import unittest

from incubation_engine import (
    ActionType,
    ConversationMachine,
    ConversationStep,
    IncubationConfig,
    Session,
)


def session_at(step: ConversationStep, config: IncubationConfig = IncubationConfig()) -> Session:
    return Session(
        session_id="session_1",
        project_name="Moon",
        founder="0x" + "70" * 20,
        started_at="2026-01-01T00:00:00+00:00",
        config=config,
        step=step,
    )


FULL_CONFIG = IncubationConfig(
    identity_name="moon", treasury_amount=10_000_000_000, vesting_months=12, liquidity_percent=20
)


class ConversationMachineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.machine = ConversationMachine()

    def test_respond_does_not_mutate(self) -> None:
        session = session_at(ConversationStep.ASK_IDENTITY_NAME)
        response = self.machine.respond(session, "moon")

        self.assertEqual(session.step, ConversationStep.ASK_IDENTITY_NAME)
        self.assertIsNone(session.config.identity_name)
        self.assertEqual(response.patch.step, ConversationStep.ASK_TREASURY_AMOUNT)
        self.assertEqual(response.patch.config.identity_name, "moon")

    def test_confirm_words(self) -> None:
        for text in ("confirm", "Yes please"):
            response = self.machine.respond(session_at(ConversationStep.CONFIRM_CONFIG, FULL_CONFIG), text)
            self.assertEqual(response.patch.step, ConversationStep.INCUBATING)

    def test_change_targets(self) -> None:
        expected = {
            "change name": ConversationStep.ASK_IDENTITY_NAME,
            "Change identity": ConversationStep.ASK_IDENTITY_NAME,
            "change amount": ConversationStep.ASK_TREASURY_AMOUNT,
            "change period": ConversationStep.ASK_VESTING_PERIOD,
        }
        for text, step in expected.items():
            session = session_at(ConversationStep.CONFIRM_CONFIG, FULL_CONFIG)
            self.assertEqual(self.machine.respond(session, text).patch.step, step)

        vague = self.machine.respond(session_at(ConversationStep.CONFIRM_CONFIG, FULL_CONFIG), "change")
        self.assertIsNone(vague.patch)

    def test_incubating_requests_next_action(self) -> None:
        session = session_at(ConversationStep.INCUBATING, FULL_CONFIG)
        for text in ("continue", "next", "launch", "start"):
            response = self.machine.respond(session, text)
            self.assertEqual(response.action_type, ActionType.MINT_IDENTITY)

    def test_incubating_reset_and_unmatched(self) -> None:
        session = session_at(ConversationStep.INCUBATING, FULL_CONFIG)
        self.assertTrue(self.machine.respond(session, "cancel").patch.cancel_in_flight)

        unmatched = self.machine.respond(session, "what now?")
        self.assertIsNone(unmatched.patch)
        self.assertIsNone(unmatched.action_type)
        self.assertIn("continue", unmatched.message)

    def test_vesting_applies_default_liquidity(self) -> None:
        config = IncubationConfig(identity_name="moon", treasury_amount=10_000_000_000)
        response = self.machine.respond(session_at(ConversationStep.ASK_VESTING_PERIOD, config), "12")
        self.assertEqual(response.patch.config.liquidity_percent, 20)
        self.assertEqual(response.patch.step, ConversationStep.CONFIRM_CONFIG)


if __name__ == "__main__":
    unittest.main()
