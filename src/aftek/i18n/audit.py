"""Translation key auditing across locale dictionaries.

The auditor compares the key sets of every locale against their union and
reports keys that are missing, duplicated within one file, or translated in
a way that looks accidental. The inconsistency check is a heuristic: it does
not look at wording, only at things every translation of a string should
share, such as interpolation placeholders, markup tags and value shape.
"""

import json
import logging
import re
from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from .locales import REQUIRED_KEYS, Language, LocaleDictionary, write_locale_file
from .translator import is_auto_translated

logger = logging.getLogger(__name__)

MAX_VALUE_LENGTH = 500
TARGET_AVERAGE_COVERAGE = 80
MINIMUM_LANGUAGE_COVERAGE = 70

_PLACEHOLDER_PATTERNS = (
    re.compile(r"\{\{\s*([\w.]+)\s*\}\}"),   # {{name}}
    re.compile(r"(?<!\{)\{\s*([\w.]*)\s*\}(?!\})"),  # {name} and {}
    re.compile(r"%\((\w+)\)[sd]"),           # %(name)s
    re.compile(r"%([sd])"),                  # %s, %d
)
_TAG_PATTERN = re.compile(r"</?\s*([a-zA-Z][a-zA-Z0-9]*)[^>]*>")


def _text_of(value) -> str:
    if isinstance(value, list):
        return "\n".join(str(item) for item in value)
    return str(value)


def placeholders(value) -> tuple:
    """Interpolation tokens in a value, as a sorted tuple."""
    text = _text_of(value)
    found = []
    for pattern in _PLACEHOLDER_PATTERNS:
        found.extend(pattern.findall(text))
        text = pattern.sub(" ", text)
    return tuple(sorted(found))


def markup_tags(value) -> tuple:
    return tuple(sorted(tag.lower() for tag in _TAG_PATTERN.findall(_text_of(value))))


def round_percent(numerator: int, denominator: int) -> int:
    """Percentage rounded half up, 0 when there is nothing to count."""
    if denominator <= 0:
        return 0
    percent = Decimal(numerator) * 100 / Decimal(denominator)
    return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass
class LanguageCoverage:
    """Translation status of one language against the union of keys."""

    complete: int
    missing: int
    auto_translated: int
    total: int
    coverage: int


@dataclass
class MissingKey:
    key: str
    languages: list


@dataclass
class Inconsistency:
    """A key whose translations disagree structurally."""

    key: str
    languages: list
    values: list
    reasons: list


@dataclass
class ValidationResult:
    errors: list = field(default_factory=list)
    warnings: list = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass
class AuditReport:
    """Everything one audit run found."""

    total_keys: int
    coverage: dict
    missing_keys: list
    duplicate_keys: list
    inconsistent_translations: list
    recommendations: list

    @property
    def is_clean(self) -> bool:
        return not (self.missing_keys or self.duplicate_keys or self.inconsistent_translations)

    def to_dict(self) -> dict:
        return {
            "totalKeys": self.total_keys,
            "translationStatus": {lang: asdict(status) for lang, status in self.coverage.items()},
            "missingKeys": [asdict(item) for item in self.missing_keys],
            "duplicateKeys": list(self.duplicate_keys),
            "inconsistentTranslations": [asdict(item) for item in self.inconsistent_translations],
            "recommendations": list(self.recommendations),
        }


class TranslationAuditor:
    """Compare locale dictionaries against each other.

    Args:
        dictionaries: mapping of language code to LocaleDictionary
        required_keys: keys every locale must define
        source_language: language used as the source for machine translation
    """

    def __init__(self, dictionaries: dict, required_keys=REQUIRED_KEYS, source_language: str = Language.EN.value):
        self.dictionaries = {str(code): dictionary for code, dictionary in dictionaries.items()}
        self.required_keys = tuple(str(key) for key in required_keys)
        self.source_language = str(source_language)

    @classmethod
    def from_mappings(cls, mappings: dict, **kwargs):
        """Build an auditor from plain ``{language: {key: value}}`` data."""
        dictionaries = {
            code: LocaleDictionary(language=str(code), entries=dict(entries))
            for code, entries in mappings.items()
        }
        return cls(dictionaries, **kwargs)

    @property
    def languages(self) -> list:
        return list(self.dictionaries)

    def all_keys(self) -> list:
        """Sorted union of keys across every locale."""
        keys = set()
        for dictionary in self.dictionaries.values():
            keys.update(dictionary.keys())
        return sorted(keys)

    def missing_keys(self) -> list:
        """Keys absent (or blank) in at least one locale."""
        missing = []
        for key in self.all_keys():
            languages = [
                code for code, dictionary in self.dictionaries.items()
                if not dictionary.has_value(key)
            ]
            if languages:
                missing.append(MissingKey(key=key, languages=languages))
        return missing

    def missing_by_language(self) -> dict:
        """For each locale, the keys of the union it lacks."""
        result = {code: [] for code in self.dictionaries}
        for item in self.missing_keys():
            for code in item.languages:
                result[code].append(item.key)
        return result

    def duplicate_keys(self) -> list:
        """``lang:key`` for keys repeated inside one locale's source."""
        duplicates = []
        for code, dictionary in self.dictionaries.items():
            seen = set()
            for key in dictionary.duplicates:
                if key not in seen:
                    duplicates.append(f"{code}:{key}")
                    seen.add(key)
        return duplicates

    def inconsistent_translations(self) -> list:
        """Keys whose translations disagree on placeholders, markup or shape."""
        inconsistencies = []
        for key in self.all_keys():
            present = [
                (code, dictionary.get(key))
                for code, dictionary in self.dictionaries.items()
                if dictionary.has_value(key)
            ]
            if len(present) < 2:
                continue

            reasons = []
            if len({isinstance(value, list) for _, value in present}) > 1:
                reasons.append("value type differs")
            if len({placeholders(value) for _, value in present}) > 1:
                reasons.append("placeholders differ")
            if len({markup_tags(value) for _, value in present}) > 1:
                reasons.append("markup differs")

            if reasons:
                values = []
                for _, value in present:
                    if value not in values:
                        values.append(value)
                inconsistencies.append(Inconsistency(
                    key=key,
                    languages=[code for code, _ in present],
                    values=values,
                    reasons=reasons,
                ))
        return inconsistencies

    def language_coverage(self, language: str) -> LanguageCoverage:
        dictionary = self.dictionaries[str(language)]
        complete = missing = auto_translated = 0
        all_keys = self.all_keys()

        for key in all_keys:
            if not dictionary.has_value(key):
                missing += 1
            elif is_auto_translated(dictionary.get(key)):
                auto_translated += 1
            else:
                complete += 1

        total = len(all_keys)
        return LanguageCoverage(
            complete=complete,
            missing=missing,
            auto_translated=auto_translated,
            total=total,
            coverage=round_percent(complete, total),
        )

    def statistics(self) -> dict:
        return {
            "totalKeys": len(self.all_keys()),
            "languages": len(self.dictionaries),
            "coverage": {code: self.language_coverage(code).coverage for code in self.dictionaries},
        }

    def validate(self) -> ValidationResult:
        """Check required keys, empty values and suspiciously long values."""
        result = ValidationResult()

        missing_required = [
            key for key in self.required_keys
            if any(not dictionary.has_value(key) for dictionary in self.dictionaries.values())
        ]
        if missing_required:
            result.errors.append(f"Missing required translation keys: {', '.join(missing_required)}")

        for code, dictionary in self.dictionaries.items():
            for key, value in dictionary.entries.items():
                if not dictionary.has_value(key):
                    result.warnings.append(f"Empty translation value for {code}:{key}")
                elif isinstance(value, str) and len(value) > MAX_VALUE_LENGTH:
                    result.warnings.append(
                        f"Very long translation for {code}:{key} ({len(value)} characters)"
                    )

        return result

    def _recommendations(self, coverage, missing, duplicates, inconsistencies) -> list:
        recommendations = []
        if coverage:
            average = sum(status.coverage for status in coverage.values()) / len(coverage)
            if average < TARGET_AVERAGE_COVERAGE:
                recommendations.append(
                    f"Overall translation coverage is {average:.0f}%. "
                    f"Aim for at least {TARGET_AVERAGE_COVERAGE}% coverage."
                )

        for code, status in coverage.items():
            if status.coverage < MINIMUM_LANGUAGE_COVERAGE:
                recommendations.append(
                    f"{code} has low coverage ({status.coverage}%). "
                    f"Priority should be given to completing {code} translations."
                )

        missing_names = {item.key for item in missing}
        missing_required = [key for key in self.required_keys if key in missing_names]
        if missing_required:
            recommendations.append(f"Missing required translation keys: {', '.join(missing_required)}")

        if duplicates:
            recommendations.append(
                f"Found {len(duplicates)} duplicate translation keys that should be cleaned up."
            )
        if inconsistencies:
            recommendations.append(
                f"Found {len(inconsistencies)} keys with inconsistent translations across languages."
            )
        return recommendations

    def audit(self) -> AuditReport:
        """Run every check and collect the results."""
        coverage = {code: self.language_coverage(code) for code in self.dictionaries}
        missing = self.missing_keys()
        duplicates = self.duplicate_keys()
        inconsistencies = self.inconsistent_translations()

        report = AuditReport(
            total_keys=len(self.all_keys()),
            coverage=coverage,
            missing_keys=missing,
            duplicate_keys=duplicates,
            inconsistent_translations=inconsistencies,
            recommendations=self._recommendations(coverage, missing, duplicates, inconsistencies),
        )
        logger.info(
            "Translation audit: %d keys, %d missing, %d duplicate, %d inconsistent",
            report.total_keys, len(missing), len(duplicates), len(inconsistencies),
        )
        return report

    def fill_missing(self, translator) -> dict:
        """Machine-translate missing keys from the source language.

        The translations are written into the in-memory dictionaries.

        Returns:
            ``{key: {language: text}}`` for every translated key
        """
        source = self.dictionaries.get(self.source_language)
        results = {}
        if source is None:
            logger.warning("No '%s' dictionary loaded, nothing to translate from", self.source_language)
            return results

        for item in self.missing_keys():
            source_value = source.get(item.key)
            if not source.has_value(item.key):
                logger.warning("No %s translation found for key: %s", self.source_language, item.key)
                continue

            results[item.key] = {self.source_language: source_value}
            for code in item.languages:
                if code == self.source_language:
                    continue
                text = _text_of(source_value)
                translated = translator.translate(text, code).translated_text
                results[item.key][code] = translated
                self.dictionaries[code].set(item.key, translated)

        logger.info("Auto-translated %d missing keys", len(results))
        return results

    def master_map(self) -> dict:
        """``{key: {language: value}}`` with '' for absent values."""
        return {
            key: {code: dictionary.get(key, "") for code, dictionary in self.dictionaries.items()}
            for key in self.all_keys()
        }

    def export(self, directory) -> list:
        """Write every locale plus ``master-translations.json`` to a directory."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        written = []
        for code, dictionary in self.dictionaries.items():
            written.append(write_locale_file(dictionary, directory / f"{code}.json"))

        master_path = directory / "master-translations.json"
        master_path.write_text(
            json.dumps(self.master_map(), ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        written.append(master_path)
        return written
