"""Annotated Type Validators for pydantic models

Attach a validator spec to a string field with Python's Annotated type hint
and pydantic v2. Specs are parsed once, when the model class is built, so a
malformed spec fails at import time rather than on the first value.

Usage:
    from typing import Annotated
    from pydantic import BaseModel
    from flagspec.validation.annotated import ValidatedBy

    class ServerOptions(BaseModel):
        host: Annotated[str, ValidatedBy("oneof(hostname,ip)")]
        port: Annotated[str, ValidatedBy("port")]
        admin: Annotated[str, ValidatedBy("email,maxlength(64)")]
"""
from __future__ import annotations

from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import CoreSchema, core_schema

from .specs import parse_validator_list, validate_all
from .validators import Validator


class ValidatedBy:
    """Validate a ``str`` field against a comma-separated spec list."""
    __slots__ = ("spec", "validators")

    def __init__(self, spec: str):
        self.spec = spec
        self.validators: list[Validator] = parse_validator_list(spec)

    def __get_pydantic_core_schema__(self, source_type: type, handler: GetCoreSchemaHandler) -> CoreSchema:
        return core_schema.no_info_after_validator_function(self._validate, handler(source_type))

    def _validate(self, v: Any) -> Any:
        if not isinstance(v, str): return v
        result = validate_all(self.validators, v)
        if not result.is_valid: raise ValueError(result.message)
        return v

    def __get_pydantic_json_schema__(self, core_schema: CoreSchema, handler: GetJsonSchemaHandler) -> JsonSchemaValue:
        return {**handler(core_schema), "x-validators": [v.name for v in self.validators]}

    def __repr__(self) -> str:
        return f"ValidatedBy({self.spec!r})"
