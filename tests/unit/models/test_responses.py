"""
Tests for ToolResponse and CacheOptions.

This module tests:
- Success/failure invariants enforced at construction
- Immutability
- Typed materialization with get_data()
- CacheOptions helpers
"""

from dataclasses import dataclass
from typing import Optional

import pytest
from pydantic import BaseModel, ValidationError


class ValueShape(BaseModel):
    value: int


@dataclass
class MemberShape:
    id: int
    name: str


class TestToolResponseConstruction:
    """Tests for ok()/failure() and the outcome invariant."""

    def test_ok_is_success(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.ok("https://x", '{"a": 1}', {"a": 1})

        assert response.success is True
        assert response.error is None
        assert response.status_code is None
        assert response.raw_content == '{"a": 1}'
        assert response.parsed_json == {"a": 1}

    def test_failure_is_not_success(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.failure("https://x", "boom", status_code=503)

        assert response.success is False
        assert response.error == "boom"
        assert response.status_code == 503
        assert response.raw_content is None
        assert response.parsed_json is None

    def test_failure_without_status_code(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.failure("https://x", "Request timed out after multiple attempts")

        assert response.status_code is None

    def test_success_with_status_code_is_rejected(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        with pytest.raises(ValidationError):
            ToolResponse(url="https://x", raw_content="ok", status_code=200)

    def test_failure_with_content_is_rejected(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        with pytest.raises(ValidationError):
            ToolResponse(url="https://x", error="boom", raw_content="body")

    def test_failure_with_json_is_rejected(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        with pytest.raises(ValidationError):
            ToolResponse(url="https://x", error="boom", parsed_json={"a": 1})

    def test_is_immutable(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.ok("https://x", "body")

        with pytest.raises(ValidationError):
            response.error = "changed"


class TestGetData:
    """Tests for ToolResponse.get_data()."""

    def test_pydantic_model(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.ok("https://x", '{"value":42}', {"value": 42})

        data = response.get_data(ValueShape)
        assert data is not None
        assert data.value == 42

    def test_dataclass(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.ok("https://x", "", {"id": 172, "name": "Keir Starmer"})

        assert response.get_data(MemberShape) == MemberShape(id=172, name="Keir Starmer")

    def test_generic_container(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.ok("https://x", "[1,2,3]", [1, 2, 3])

        assert response.get_data(list[int]) == [1, 2, 3]

    def test_no_json_returns_none(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.ok("https://x", "<rss></rss>", None)

        assert response.get_data(ValueShape) is None

    def test_shape_mismatch_returns_none(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.ok("https://x", '{"value":"abc"}', {"value": "abc"})

        assert response.get_data(ValueShape) is None

    def test_field_names_match_case_insensitively(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.ok("https://x", '{"Value":42}', {"Value": 42})

        assert response.get_data(ValueShape) == ValueShape(value=42)

    def test_capitalized_field_from_lowercase_payload(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        class Envelope(BaseModel):
            Value: int

        response = ToolResponse.ok("https://x", '{"value":42}', {"value": 42})

        assert response.get_data(Envelope).Value == 42

    def test_nested_field_names_matched(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        class Page(BaseModel):
            items: list[ValueShape]
            totalResults: int

        payload = {"Items": [{"VALUE": 1}, {"value": 2}], "TotalResults": 2}
        response = ToolResponse.ok("https://x", "{}", payload)

        page = response.get_data(Page)

        assert [item.value for item in page.items] == [1, 2]
        assert page.totalResults == 2

    def test_exact_name_wins_over_folded(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        payload = {"VALUE": "wrong", "value": 7}
        response = ToolResponse.ok("https://x", "{}", payload)

        assert response.get_data(ValueShape) == ValueShape(value=7)

    def test_undefined_shape_returns_none(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        class Member(BaseModel):
            value: "Undefined"  # noqa: F821

        response = ToolResponse.ok("https://x", '{"value":42}', {"value": 42})

        assert response.get_data(Member) is None

    def test_failure_returns_none(self) -> None:
        from opendata_gateway.models.responses import ToolResponse

        response = ToolResponse.failure("https://x", "boom", 500)

        assert response.get_data(Optional[ValueShape]) is None


class TestCacheOptions:
    """Tests for CacheOptions helpers."""

    def test_default(self) -> None:
        from opendata_gateway.models.responses import CacheOptions

        options = CacheOptions.default()
        assert options.enabled is True
        assert options.ttl_seconds is None

    def test_disabled(self) -> None:
        from opendata_gateway.models.responses import CacheOptions

        assert CacheOptions.disabled().enabled is False

    def test_from_ttl(self) -> None:
        from opendata_gateway.models.responses import CacheOptions

        options = CacheOptions.from_ttl(60)
        assert options.enabled is True
        assert options.ttl_seconds == 60

    def test_ttl_must_be_positive(self) -> None:
        from opendata_gateway.models.responses import CacheOptions

        with pytest.raises(ValidationError):
            CacheOptions.from_ttl(0)
