import unittest
from decimal import Decimal

from contract_engine import rules


class RuleTests(unittest.TestCase):
    def test_presence(self):
        r = rules.Presence()
        for blank in (None, "", "   ", [], {}):
            self.assertEqual(r.errors_for(blank), [("blank", "can't be blank")], repr(blank))
        for present in ("x", 0, False, [0]):
            self.assertEqual(r.errors_for(present), [], repr(present))

    def test_non_presence_rules_skip_absent_values(self):
        for r in (
            rules.Inclusion(["a"]),
            rules.Length(minimum=1),
            rules.Format(r"\d"),
            rules.Numericality(),
            rules.Predicate(lambda v: False),
        ):
            self.assertEqual(r.errors_for(None), [], repr(r))

    def test_inclusion_and_exclusion(self):
        self.assertEqual(rules.Inclusion(["free", "pro"]).errors_for("pro"), [])
        self.assertEqual(rules.Inclusion(["free", "pro"]).errors_for("gold"),
                         [("inclusion", "is not included in the list")])
        self.assertEqual(rules.Exclusion(["admin"]).errors_for("admin"), [("exclusion", "is reserved")])

    def test_length(self):
        r = rules.Length(minimum=3, maximum=5)
        self.assertEqual(r.errors_for("ab"), [("too_short", "is too short (minimum is 3 characters)")])
        self.assertEqual(r.errors_for("abcdef"), [("too_long", "is too long (maximum is 5 characters)")])
        self.assertEqual(r.errors_for("abcd"), [])
        self.assertEqual(rules.Length(exact=2).errors_for("abc")[0][0], "wrong_length")
        self.assertEqual(r.errors_for(12345)[0][0], "invalid")
        with self.assertRaises(ValueError):
            rules.Length()

    def test_format(self):
        r = rules.Format(r"^[a-z]+$")
        self.assertEqual(r.errors_for("abc"), [])
        self.assertEqual(r.errors_for("ABC"), [("invalid", "is invalid")])
        self.assertEqual(r.errors_for(123), [("invalid", "is invalid")])

    def test_numericality(self):
        r = rules.Numericality(greater_than_or_equal_to=13, less_than=130, only_integer=True)
        self.assertEqual(r.errors_for(30), [])
        self.assertEqual(r.errors_for(12)[0], ("greater_than_or_equal_to", "must be greater than or equal to 13"))
        self.assertEqual(r.errors_for(130)[0][0], "less_than")
        self.assertEqual(r.errors_for(30.5)[0][0], "not_an_integer")
        self.assertEqual(r.errors_for("30")[0][0], "not_a_number")
        self.assertEqual(r.errors_for(True)[0][0], "not_a_number")
        self.assertEqual(rules.Numericality(less_than_or_equal_to=1).errors_for(Decimal("0.5")), [])

    def test_predicate_custom_kind(self):
        r = rules.Predicate(lambda v: v % 2 == 0, kind="odd", message="must be even")
        self.assertEqual(r.errors_for(4), [])
        self.assertEqual(r.errors_for(3), [("odd", "must be even")])
