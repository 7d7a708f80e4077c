"""Integration tests for the pydantic Annotated integration.

Tests cover:
- Valid and invalid field values
- Spec errors at model definition time
- JSON schema extension
"""

from typing import Annotated

import pytest
from pydantic import BaseModel, ValidationError

from flagspec.core.errors import ErrorCode
from flagspec.validation import SpecError
from flagspec.validation.annotated import ValidatedBy


class ServerOptions(BaseModel):
    host: Annotated[str, ValidatedBy("oneof(hostname,ip)")]
    port: Annotated[str, ValidatedBy("port")]
    admin: Annotated[str, ValidatedBy("email,maxlength(64)")]


@pytest.mark.integration
class TestValidatedBy:
    """Test ValidatedBy on pydantic models."""

    def test_valid_model(self):
        options = ServerOptions(host="10.0.0.1", port="8080", admin="ops@example.com")

        assert options.port == "8080"

    def test_invalid_value_raises_validation_error(self):
        """Test the rendered failure message reaches pydantic."""
        with pytest.raises(ValidationError) as exc_info:
            ServerOptions(host="example.com", port="70000", admin="ops@example.com")

        errors = exc_info.value.errors()
        assert len(errors) == 1
        assert errors[0]["loc"] == ("port",)
        assert "between 1 and 65535" in str(exc_info.value)

    def test_every_field_is_checked(self):
        with pytest.raises(ValidationError) as exc_info:
            ServerOptions(host="-bad-", port="x", admin="a" * 60 + "@example.com")

        assert {e["loc"][0] for e in exc_info.value.errors()} == {"host", "port", "admin"}

    def test_malformed_spec_fails_at_definition(self):
        """Test a bad spec is reported when the annotation is created."""
        with pytest.raises(SpecError) as exc_info:
            ValidatedBy("minlength:5")

        assert exc_info.value.matches(ErrorCode.E3012_MUST_USE_PARENTHESES)

    def test_json_schema_lists_validators(self):
        schema = ServerOptions.model_json_schema()

        assert schema["properties"]["port"]["x-validators"] == ["int-range[1,65535]"]
        assert schema["properties"]["admin"]["x-validators"] == ["email", "max-length[64]"]
        assert schema["properties"]["port"]["type"] == "string"

    def test_repr(self):
        assert repr(ValidatedBy("email")) == "ValidatedBy('email')"
