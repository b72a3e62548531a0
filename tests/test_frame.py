import unittest

import pandas as pd

from contract_engine import frame
from tests._util import channel_schema


class FrameTests(unittest.TestCase):
    def setUp(self):
        self.schema = channel_schema()
        self.df = pd.DataFrame(
            {
                "channel_id":    [1, None, 3],
                "user.username": ["alice", "bob", None],
                "user.age":      ["30", None, None],
                "ignored":       ["x", "y", "z"],
            },
            index=["a", "b", "c"],
        )

    def test_from_frame_builds_nested_contracts(self):
        contracts = frame.from_frame(self.schema, self.df, options="batch-1")
        self.assertEqual(len(contracts), 3)

        first, second, third = contracts
        self.assertEqual(first.channel_id, 1)
        self.assertEqual(first.user.username, "alice")
        self.assertEqual(first.user.age, 30)
        self.assertEqual(first.options, "batch-1")
        self.assertIsNone(second.channel_id)
        self.assertIsNone(second.user.age)
        self.assertIsNone(first.record)
        self.assertIsNone(third.user)      # every user.* cell missing

    def test_validate_frame_reports_per_row(self):
        report = frame.validate_frame(self.schema, self.df)
        self.assertEqual(list(report.index), ["a", "b", "c"])
        self.assertEqual(report["valid"].tolist(), [True, False, True])
        self.assertEqual(report.loc["b", "errors"], {"channel_id": ["can't be blank"]})
        self.assertEqual(report.loc["a", "errors"], {})

    def test_to_frame_flattens_nested_contracts(self):
        contracts = [
            self.schema.new(channel_id=1, user={"username": "alice", "age": 30}),
            self.schema.new(channel_id=2, user={"username": "bob"}),
        ]
        out = frame.to_frame(contracts)
        self.assertEqual(out["channel_id"].tolist(), [1, 2])
        self.assertEqual(out["user.username"].tolist(), ["alice", "bob"])

        again = frame.from_frame(self.schema, out)
        self.assertEqual([c.user.username for c in again], ["alice", "bob"])
        self.assertEqual(again[0].user.age, 30)
        self.assertIsNone(again[1].user.age)
