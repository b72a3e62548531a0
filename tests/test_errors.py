import unittest

from contract_engine import ErrorDetail, Errors


class ErrorsTests(unittest.TestCase):
    def setUp(self):
        self.errors = Errors("signup/user_contract")

    def test_empty_report(self):
        self.assertFalse(self.errors)
        self.assertEqual(self.errors["username"], [])
        self.assertNotIn("username", self.errors)
        self.assertEqual(self.errors.full_messages(), [])

    def test_add_uses_default_messages(self):
        detail = self.errors.add("username", "blank")
        self.assertEqual(detail, ErrorDetail("username", "blank", "can't be blank", "signup/user_contract"))
        self.assertEqual(self.errors.add("plan").message, "is invalid")
        self.assertEqual(self.errors.add("plan", "mystery").message, "is invalid")

    def test_views(self):
        self.errors.add("username", "blank")
        self.errors.add("username", "too_short", "is too short (minimum is 3 characters)")
        self.errors.add("channel_id", "coercion", "is not a valid integer")

        self.assertEqual(len(self.errors), 2)
        self.assertEqual(self.errors.count(), 3)
        self.assertEqual(list(self.errors), ["username", "channel_id"])
        self.assertEqual(self.errors.details(), {"username": ["blank", "too_short"], "channel_id": ["coercion"]})
        self.assertEqual(self.errors.to_dict()["channel_id"], ["is not a valid integer"])
        self.assertEqual(
            self.errors.full_messages(),
            [
                "Username can't be blank",
                "Username is too short (minimum is 3 characters)",
                "Channel id is not a valid integer",
            ],
        )
        self.assertTrue(self.errors.added("username", "blank"))
        self.assertFalse(self.errors.added("username", "invalid"))

    def test_lookup_returns_a_copy(self):
        self.errors.add("username", "blank")
        self.errors["username"].clear()
        self.assertEqual(self.errors.count(), 1)

    def test_clear(self):
        self.errors.add("username", "blank")
        self.errors.clear()
        self.assertFalse(self.errors)

    def test_message_key(self):
        detail = self.errors.add("username", "blank")
        self.assertEqual(detail.key, "contracts.signup/user_contract.attributes.username.blank")
