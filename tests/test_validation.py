"""Tests for strict argument validation."""

import pytest

from referencime.errors import ValidationError
from referencime.validation import validate_arguments


@pytest.fixture
def ranking(registry):
    return registry.get("detect_ranking_changes")


class TestValidateArguments:
    def test_defaults_applied(self, ranking):
        assert validate_arguments(ranking, {"website_id": 3}) == {
            "website_id": 3,
            "days": 7,
            "threshold": 3,
        }

    def test_unset_optional_fields_are_omitted(self, registry):
        summary = registry.get("get_website_performance_summary")
        normalized = validate_arguments(summary, {"website_id": 3, "start_date": "2024-01-01"})

        assert normalized == {"website_id": 3, "period": "30days", "start_date": "2024-01-01"}

    def test_extra_fields_dropped(self, ranking):
        normalized = validate_arguments(ranking, {"website_id": 3, "colour": "blue"})

        assert "colour" not in normalized

    def test_missing_required_field(self, ranking):
        with pytest.raises(ValidationError) as excinfo:
            validate_arguments(ranking, {})

        err = excinfo.value
        assert err.tool == "detect_ranking_changes"
        assert err.fields == ["website_id"]
        assert "detect_ranking_changes" in str(err)
        assert "website_id" in str(err)

    def test_string_is_not_cast_to_integer(self, ranking):
        with pytest.raises(ValidationError) as excinfo:
            validate_arguments(ranking, {"website_id": "3"})

        assert excinfo.value.fields == ["website_id"]
        assert "expected integer" in str(excinfo.value)

    def test_bool_is_not_an_integer(self, ranking):
        with pytest.raises(ValidationError):
            validate_arguments(ranking, {"website_id": True})

    def test_float_is_not_an_integer(self, ranking):
        with pytest.raises(ValidationError):
            validate_arguments(ranking, {"website_id": 3, "days": 7.5})

    def test_bad_list_item(self, registry):
        compare = registry.get("compare_keywords_performance")
        with pytest.raises(ValidationError) as excinfo:
            validate_arguments(compare, {"keywords": ["seo", 42], "website_id": 3})

        assert excinfo.value.fields == ["keywords.1"]

    def test_every_problem_reported(self, registry):
        compare = registry.get("compare_keywords_performance")
        with pytest.raises(ValidationError) as excinfo:
            validate_arguments(compare, {"keywords": "seo"})

        assert set(excinfo.value.fields) == {"keywords", "website_id"}

    def test_unknown_period(self, registry):
        evolution = registry.get("get_position_evolution")
        with pytest.raises(ValidationError) as excinfo:
            validate_arguments(evolution, {"keyword": "seo", "website_id": 3, "period": "1year"})

        assert excinfo.value.fields == ["period"]

    def test_date_format_checked(self, registry):
        summary = registry.get("get_website_performance_summary")
        with pytest.raises(ValidationError) as excinfo:
            validate_arguments(summary, {"website_id": 3, "end_date": "05/03/2024"})

        assert excinfo.value.fields == ["end_date"]

    def test_none_means_no_arguments(self, registry):
        assert validate_arguments(registry.get("list_websites_by_user"), None) == {}

    def test_non_mapping_rejected(self, ranking):
        with pytest.raises(ValidationError) as excinfo:
            validate_arguments(ranking, ["website_id", 3])

        assert excinfo.value.fields == ["arguments"]
