"""Tests for the Entry pydantic models."""

from glossary_spine.core.models import Entry, Takeaways


class TestTakeaways:
    def test_accepts_camel_case_keys(self):
        t = Takeaways.model_validate(
            {
                "tldr": "short",
                "definitionAndStructure": [{"key": "k", "value": "v"}],
                "usageInAPIs": {"tags": ["auth"], "description": "d"},
                "didYouKnow": "fact",
            }
        )
        assert t.definition_and_structure[0].key == "k"
        assert t.usage_in_apis.tags == ["auth"]
        assert t.did_you_know == "fact"

    def test_accepts_snake_case_keys(self):
        t = Takeaways(tldr="short", best_practices=["rotate"])
        assert t.best_practices == ["rotate"]

    def test_dump_by_alias_is_camel_case(self):
        data = Takeaways(tldr="short").model_dump(by_alias=True)
        assert set(data) == {
            "tldr",
            "definitionAndStructure",
            "historicalContext",
            "usageInAPIs",
            "bestPractices",
            "recommendedReading",
            "didYouKnow",
        }


class TestEntry:
    def test_nulls_become_empty(self):
        entry = Entry.model_validate(
            {"input_term": "Webhook", "categories": None, "faq": None, "meta_title": None}
        )
        assert entry.categories == []
        assert entry.faq == []
        assert entry.meta_title == ""

    def test_is_published(self, make_entry):
        assert not make_entry().is_published
        assert make_entry(github_pr_url="https://github.com/acme/docs/pull/1").is_published

    def test_takeaways_kept_as_stored(self):
        entry = Entry.model_validate({"input_term": "Webhook", "takeaways": {"bestPractices": ["x"]}})
        assert entry.takeaways == {"bestPractices": ["x"]}
