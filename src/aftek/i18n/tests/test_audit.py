"""Tests for the translation auditor."""

import json

import pytest

from aftek.i18n.audit import TranslationAuditor, markup_tags, placeholders, round_percent
from aftek.i18n.locales import load_locale_dir, parse_locale
from aftek.i18n.translator import AUTO_TRANSLATED_PREFIX, TranslationResult


class StubTranslator:
    """Translator double that tags text with the target language."""

    def __init__(self):
        self.calls = []

    def translate(self, text, target_language):
        self.calls.append((text, target_language))
        return TranslationResult(f"{target_language}:{text}", "en", target_language, 1.0, "stub")


class TestHelpers:
    @pytest.mark.parametrize("value,expected", [
        ("Hello {name}", ("name",)),
        ("{{count}} items", ("count",)),
        ("%(total)s and %d", ("d", "total")),
        ("No tokens", ()),
        (["{a}", "{b}"], ("a", "b")),
    ])
    def test_placeholders(self, value, expected):
        assert placeholders(value) == expected

    def test_markup_tags(self):
        assert markup_tags("<b>Bold</b> and <a href='#'>link</a>") == ("a", "a", "b", "b")

    @pytest.mark.parametrize("numerator,denominator,expected", [
        (1, 2, 50),
        (1, 8, 13),
        (2, 3, 67),
        (0, 0, 0),
    ])
    def test_round_percent_rounds_half_up(self, numerator, denominator, expected):
        assert round_percent(numerator, denominator) == expected


class TestKeyComparison:
    """Missing keys across locales."""

    def test_all_keys_is_sorted_union(self):
        auditor = TranslationAuditor.from_mappings({"en": {"b": "B", "a": "A"}, "ja": {"c": "シー"}})

        assert auditor.all_keys() == ["a", "b", "c"]

    def test_disjoint_dictionaries_miss_everything(self):
        auditor = TranslationAuditor.from_mappings({"en": {"a": "A", "b": "B"}, "ja": {"c": "シー"}})

        missing = {item.key: item.languages for item in auditor.missing_keys()}

        assert missing == {"a": ["ja"], "b": ["ja"], "c": ["en"]}
        assert auditor.missing_by_language() == {"en": ["c"], "ja": ["a", "b"]}

    def test_blank_values_count_as_missing(self):
        auditor = TranslationAuditor.from_mappings({"en": {"a": "A"}, "ja": {"a": "  "}})

        assert [(item.key, item.languages) for item in auditor.missing_keys()] == [("a", ["ja"])]

    def test_identical_dictionaries_have_no_issues(self):
        entries = {"nav.home": "Home", "cart.itemCount": "{count} items"}
        auditor = TranslationAuditor.from_mappings({"en": entries, "ja": dict(entries)}, required_keys=())

        report = auditor.audit()

        assert report.missing_keys == []
        assert report.duplicate_keys == []
        assert report.inconsistent_translations == []
        assert report.is_clean


class TestDuplicates:
    def test_duplicates_are_reported_once_per_locale(self):
        dictionaries = {
            "en": parse_locale('{"a": "A", "a": "A2", "a": "A3", "b": "B"}', "en"),
            "ja": parse_locale('{"a": "エー", "b": "ビー"}', "ja"),
        }

        assert TranslationAuditor(dictionaries).duplicate_keys() == ["en:a"]

    def test_repeated_nested_object_is_reported(self):
        dictionaries = {
            "en": parse_locale('{"nav": {"home": "Home"}, "nav": {"about": "About"}}', "en"),
            "ja": parse_locale('{"nav": {"about": "会社概要"}}', "ja"),
        }

        assert TranslationAuditor(dictionaries).duplicate_keys() == ["en:nav"]


class TestInconsistencies:
    def test_different_wording_is_not_inconsistent(self):
        auditor = TranslationAuditor.from_mappings({"en": {"a": "Home"}, "ja": {"a": "ホーム"}})

        assert auditor.inconsistent_translations() == []

    def test_placeholder_mismatch(self):
        auditor = TranslationAuditor.from_mappings({
            "en": {"count": "{count} items"},
            "ja": {"count": "{count} 点"},
            "ko": {"count": "{number}개"},
        })

        [item] = auditor.inconsistent_translations()

        assert item.key == "count"
        assert item.reasons == ["placeholders differ"]
        assert item.languages == ["en", "ja", "ko"]

    def test_markup_and_type_mismatch(self):
        auditor = TranslationAuditor.from_mappings({
            "en": {"intro": "<b>Fast</b> delivery", "features": ["A", "B"]},
            "ja": {"intro": "速い配達", "features": "A, B"},
        })

        reasons = {item.key: item.reasons for item in auditor.inconsistent_translations()}

        assert reasons == {"features": ["value type differs"], "intro": ["markup differs"]}


class TestCoverage:
    def test_auto_translated_values_are_counted_separately(self):
        auditor = TranslationAuditor.from_mappings({
            "en": {"a": "A", "b": "B", "c": "C"},
            "ja": {"a": "エー", "b": f"{AUTO_TRANSLATED_PREFIX} B"},
        })

        status = auditor.language_coverage("ja")

        assert (status.complete, status.auto_translated, status.missing, status.total) == (1, 1, 1, 3)
        assert status.coverage == 33

    def test_recommendations_flag_low_coverage(self):
        auditor = TranslationAuditor.from_mappings(
            {"en": {"a": "A", "b": "B"}, "ja": {}},
            required_keys=("a",),
        )

        recommendations = auditor.audit().recommendations

        assert "Overall translation coverage is 50%. Aim for at least 80% coverage." in recommendations
        assert "ja has low coverage (0%). Priority should be given to completing ja translations." in recommendations
        assert "Missing required translation keys: a" in recommendations

    def test_report_serializes_with_storefront_keys(self):
        auditor = TranslationAuditor.from_mappings({"en": {"a": "A"}, "ja": {}}, required_keys=())

        data = auditor.audit().to_dict()

        assert data["totalKeys"] == 1
        assert data["translationStatus"]["ja"]["missing"] == 1
        assert data["missingKeys"] == [{"key": "a", "languages": ["ja"]}]

    def test_statistics(self):
        auditor = TranslationAuditor.from_mappings({
            "en": {"a": "A", "b": "B", "c": "C"},
            "ja": {"a": "エー", "b": f"{AUTO_TRANSLATED_PREFIX} B"},
        })

        assert auditor.statistics() == {"totalKeys": 3, "languages": 2, "coverage": {"en": 100, "ja": 33}}


class TestValidate:
    def test_missing_required_key_is_an_error(self):
        auditor = TranslationAuditor.from_mappings({"en": {"nav.home": "Home"}, "ja": {}}, required_keys=("nav.home",))

        result = auditor.validate()

        assert not result.is_valid
        assert result.errors == ["Missing required translation keys: nav.home"]

    def test_empty_and_long_values_are_warnings(self):
        auditor = TranslationAuditor.from_mappings({"en": {"a": "", "b": "x" * 501}}, required_keys=())

        result = auditor.validate()

        assert result.is_valid
        assert result.warnings == [
            "Empty translation value for en:a",
            "Very long translation for en:b (501 characters)",
        ]


class TestFillMissing:
    def test_missing_keys_are_translated_from_english(self):
        auditor = TranslationAuditor.from_mappings({
            "en": {"a": "Home", "b": "About"},
            "ja": {"a": "ホーム"},
            "ko": {},
        })
        translator = StubTranslator()

        results = auditor.fill_missing(translator)

        assert results == {
            "a": {"en": "Home", "ko": "ko:Home"},
            "b": {"en": "About", "ja": "ja:About", "ko": "ko:About"},
        }
        assert auditor.dictionaries["ja"].get("b") == "ja:About"
        assert auditor.missing_keys() == []

    def test_keys_without_english_source_are_skipped(self):
        auditor = TranslationAuditor.from_mappings({"en": {}, "ja": {"a": "ホーム"}})
        translator = StubTranslator()

        assert auditor.fill_missing(translator) == {}
        assert translator.calls == []


class TestExport:
    def test_export_writes_locales_and_master_map(self, tmp_path, write_locales):
        auditor = TranslationAuditor(load_locale_dir(write_locales({"en": {"nav": {"home": "Home"}}, "ja": {}})))

        written = auditor.export(tmp_path / "out")

        assert sorted(path.name for path in written) == ["en.json", "ja.json", "master-translations.json"]
        master = json.loads((tmp_path / "out" / "master-translations.json").read_text(encoding="utf-8"))
        assert master == {"nav.home": {"en": "Home", "ja": ""}}
        assert json.loads((tmp_path / "out" / "en.json").read_text(encoding="utf-8")) == {"nav.home": "Home"}
