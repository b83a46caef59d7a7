"""Tests for operation parameter specs and validators."""

from glossary_spine.framework.params import OperationSpec, ParamDef, enum_value, non_blank
from glossary_spine.publishing.create_pr import CacheStrategy


def _spec() -> OperationSpec:
    return OperationSpec(
        required_params={"term": ParamDef(name="term", type=str, description="Term", validator=non_blank)},
        optional_params={
            "on_cache_hit": ParamDef(
                name="on_cache_hit",
                type=str,
                description="Cache strategy",
                default="stale",
                validator=enum_value(CacheStrategy),
                error_message="bad strategy",
            ),
        },
        description="Publish one term.",
    )


class TestOperationSpec:
    def test_valid_params_get_defaults(self):
        params = {"term": "Webhook"}
        result = _spec().validate(params)
        assert result.valid
        assert params["on_cache_hit"] == "stale"

    def test_missing_required(self):
        result = _spec().validate({})
        assert not result.valid
        assert result.missing_params == ["term"]
        assert "Missing required parameters: term" in result.get_error_message()

    def test_blank_term_invalid(self):
        result = _spec().validate({"term": "   "})
        assert "term" in result.invalid_params

    def test_wrong_type(self):
        result = _spec().validate({"term": 3})
        assert result.invalid_params["term"] == "Expected type str, got int"

    def test_enum_validator(self):
        result = _spec().validate({"term": "Webhook", "on_cache_hit": "sometimes"})
        assert result.invalid_params == {"on_cache_hit": "bad strategy"}

    def test_enum_accepts_all_values(self):
        for strategy in ("stale", "revalidate"):
            assert _spec().validate({"term": "Webhook", "on_cache_hit": strategy}).valid
