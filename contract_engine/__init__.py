"""
contract_engine – schema-driven data contracts with nested validation.
"""
from .contract import Contract
from .errors import Errors, ErrorDetail, InvalidContract, SchemaError
from .schema import AttributeSpec, Schema, SchemaBuilder
from .types import CoercionError, NestedContractType
from .validator import assert_valid, error_paths, validate
from .loader import load_schema, schema_from_mapping
from .card import to_markdown_card

__all__ = [
    "Contract",
    "Errors",
    "ErrorDetail",
    "InvalidContract",
    "SchemaError",
    "AttributeSpec",
    "Schema",
    "SchemaBuilder",
    "CoercionError",
    "NestedContractType",
    "validate",
    "assert_valid",
    "error_paths",
    "load_schema",
    "schema_from_mapping",
    "to_markdown_card",
]
