import json
import unittest
from pathlib import Path

from contract_engine import SchemaError, loader, rules
from tests._util import SIGNUP_J, tmp_json


class LoaderTests(unittest.TestCase):
    def test_load_from_disk(self):
        schema = loader.load_schema(SIGNUP_J)
        self.assertEqual(schema.name, "SignupContract")
        self.assertEqual(schema.attribute_names, ("channel_id", "plan", "record", "user"))
        self.assertEqual(schema["record"].type.schema["created_at"].type.name, "datetime")

    def test_load_bundled_by_basename(self):
        schema = loader.load_schema("signup_contract.json")
        self.assertEqual(schema.subschema("user").qualname, "SignupContract.UserContract")

    def test_missing_contract_raises(self):
        with self.assertRaises(FileNotFoundError):
            loader.load_schema("does_not_exist.json")

    def test_invalid_json_raises_value_error(self):
        p = tmp_json({})
        p.write_text("{ not json", encoding="utf-8")
        try:
            with self.assertRaises(ValueError):
                loader.load_schema(p)
        finally:
            p.unlink(missing_ok=True)

    def test_title_defaults_to_file_stem(self):
        p = tmp_json({"fields": {"n": {"type": "integer"}}})
        try:
            schema = loader.load_schema(p)
            self.assertEqual(schema.name, loader.utils._camelize(Path(p).stem))
        finally:
            p.unlink(missing_ok=True)

    def test_loaded_schema_validates(self):
        schema = loader.load_schema(SIGNUP_J)
        good = schema.new({"channel_id": "3", "user": {"username": "alice", "age": "30"}})
        self.assertTrue(good.is_valid())
        self.assertEqual(good.plan, "free")

        bad = schema.new({"channel_id": 0, "plan": "gold", "user": {"username": "Al", "age": 9}})
        self.assertFalse(bad.is_valid())
        self.assertEqual(bad.errors.details(), {
            "channel_id": ["greater_than_or_equal_to"],
            "plan": ["inclusion"],
            "user": ["invalid"],
        })
        self.assertEqual(bad.user.errors.details(), {
            "username": ["too_short", "invalid"],
            "age": ["greater_than_or_equal_to"],
        })


class SchemaFromMappingTests(unittest.TestCase):
    def test_field_options_become_rules(self):
        schema = loader.schema_from_mapping({
            "title": "Doc",
            "fields": {
                "code": {"type": "string", "required": True, "enum": ["A"], "max_length": 1, "pattern": "^A$"},
                "score": {"type": ["number", "null"], "minimum": 0, "maximum": 1},
                "day": {"type": "string", "format": "date"},
                "blob": {"type": "object"},
            },
        })
        kinds = [type(r) for r in schema["code"].rules]
        self.assertEqual(kinds, [rules.Presence, rules.Inclusion, rules.Length, rules.Format])
        self.assertEqual(schema["score"].type.name, "float")
        self.assertEqual(schema["day"].type.name, "date")
        self.assertEqual(schema["blob"].type.name, "value")
        self.assertEqual(schema["blob"].rules, ())

    def test_required_nested_contract(self):
        schema = loader.schema_from_mapping({
            "fields": {"owner": {"required": True, "fields": {"name": {"type": "string"}}}},
        })
        self.assertEqual(schema.name, "Contract")
        contract = schema.new({})
        self.assertFalse(contract.is_valid())
        self.assertEqual(contract.errors.details(), {"owner": ["blank"]})
        self.assertTrue(schema.new(owner={"name": "x"}).is_valid())

    def test_nested_default(self):
        schema = loader.schema_from_mapping({
            "fields": {"meta": {"default": {"v": "1"}, "fields": {"v": {"type": "integer"}}}},
        })
        self.assertEqual(schema.new().meta.v, 1)

    def test_malformed_documents_raise(self):
        for doc in (
            [],
            {"title": "no fields"},
            {"fields": []},
            {"fields": {"x": "integer"}},
            {"fields": {"x": {"type": "uuid"}}},
            {"fields": {"x": {"type": ["integer", "string"]}}},
        ):
            with self.assertRaises(SchemaError, msg=json.dumps(doc)):
                loader.schema_from_mapping(doc)
