"""Management command to audit locale files and optionally fill their gaps."""

import json

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from aftek.i18n.audit import TranslationAuditor
from aftek.i18n.locales import Language, LocaleFileError, load_locale_dir, write_locale_file
from aftek.i18n.services import save_translation
from aftek.i18n.translator import Translator


class Command(BaseCommand):
    help = "Audit translation keys across locale files"

    def add_arguments(self, parser):
        parser.add_argument(
            "--locales-dir",
            default=None,
            help="Directory of <language>.json locale files (default: settings.LOCALES_DIR)",
        )
        parser.add_argument(
            "--fix-missing",
            action="store_true",
            help="Machine-translate missing keys and write them back to the locale files",
        )
        parser.add_argument(
            "--save-to-database",
            action="store_true",
            help="With --fix-missing, also store the new translations as website texts",
        )
        parser.add_argument(
            "--export",
            metavar="DIR",
            default=None,
            help="Export every locale plus master-translations.json to DIR",
        )
        parser.add_argument(
            "--validate",
            action="store_true",
            help="Fail when required keys are missing",
        )
        parser.add_argument(
            "--google-api-key",
            default=None,
            help="Use Google Translate with this API key",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print the audit report as JSON",
        )

    def handle(self, *args, **options):
        if options["save_to_database"] and not options["fix_missing"]:
            raise CommandError("--save-to-database requires --fix-missing")

        locales_dir = options["locales_dir"] or settings.LOCALES_DIR
        try:
            dictionaries = load_locale_dir(locales_dir)
        except LocaleFileError as e:
            raise CommandError(str(e)) from e

        if not dictionaries:
            raise CommandError(f"No translation files found in {locales_dir}")

        auditor = TranslationAuditor(dictionaries)
        report = auditor.audit()

        if options["json"]:
            data = report.to_dict()
            data["statistics"] = auditor.statistics()
            self.stdout.write(json.dumps(data, ensure_ascii=False, indent=2))
        else:
            self._print_report(auditor, report)

        if options["fix_missing"] and report.missing_keys:
            self._fix_missing(auditor, options)

        if options["export"]:
            written = auditor.export(options["export"])
            self.stdout.write(self.style.SUCCESS(f"\nExported {len(written)} files to {options['export']}"))

        if options["validate"]:
            result = auditor.validate()
            for warning in result.warnings:
                self.stdout.write(self.style.WARNING(f"  {warning}"))
            if not result.is_valid:
                raise CommandError("; ".join(result.errors))
            self.stdout.write(self.style.SUCCESS("Validation passed"))

    def _print_report(self, auditor, report):
        self.stdout.write("\nTranslation Status Report")
        self.stdout.write("=" * 50)
        self.stdout.write(f"Total translation keys: {report.total_keys}")
        self.stdout.write(f"Languages: {len(auditor.languages)}\n")

        for code, status in report.coverage.items():
            language = Language.from_code(code)
            name = language.label if language else code
            filled = status.coverage // 10
            bar = "█" * filled + "░" * (10 - filled)
            self.stdout.write(f"{name} ({code}):")
            self.stdout.write(f"  Coverage: {bar} {status.coverage}%")
            self.stdout.write(
                f"  Complete: {status.complete}, Missing: {status.missing}, "
                f"Auto-translated: {status.auto_translated}\n"
            )

        if report.missing_keys:
            self.stdout.write(self.style.ERROR("Missing Translation Keys:"))
            self.stdout.write("-" * 30)
            for item in report.missing_keys:
                self.stdout.write(f"  {item.key}: missing in {', '.join(item.languages)}")
            self.stdout.write("")

        if report.duplicate_keys:
            self.stdout.write(self.style.WARNING("Duplicate Keys:"))
            self.stdout.write("-" * 30)
            for key in report.duplicate_keys:
                self.stdout.write(f"  {key}")
            self.stdout.write("")

        if report.inconsistent_translations:
            self.stdout.write(self.style.WARNING("Inconsistent Translations:"))
            self.stdout.write("-" * 30)
            for item in report.inconsistent_translations:
                self.stdout.write(f"  {item.key}: {', '.join(item.reasons)} ({', '.join(item.languages)})")
            self.stdout.write("")

        self.stdout.write("Summary:")
        self.stdout.write("-" * 30)
        self.stdout.write(f"Total keys: {report.total_keys}")
        self.stdout.write(f"Missing keys: {len(report.missing_keys)}")
        self.stdout.write(f"Duplicate keys: {len(report.duplicate_keys)}")
        self.stdout.write(f"Inconsistent translations: {len(report.inconsistent_translations)}")

        for recommendation in report.recommendations:
            self.stdout.write(f"  - {recommendation}")

        if report.is_clean:
            self.stdout.write(self.style.SUCCESS("\nAll translations are complete and consistent!"))
        else:
            self.stdout.write(self.style.WARNING(
                "\nSome issues were found. Consider running with --fix-missing to auto-translate missing keys."
            ))

    def _fix_missing(self, auditor, options):
        self.stdout.write("\nStarting auto-translation of missing keys...")
        with Translator(google_api_key=options["google_api_key"]) as translator:
            results = auditor.fill_missing(translator)

        changed = set()
        for key, translations in results.items():
            for code, text in translations.items():
                if code == auditor.source_language:
                    continue
                changed.add(code)
                if options["save_to_database"]:
                    save_translation(key, code, text)

        for code in sorted(changed):
            dictionary = auditor.dictionaries[code]
            if dictionary.source is not None:
                write_locale_file(dictionary, dictionary.source)
                self.stdout.write(self.style.SUCCESS(f"  Updated {dictionary.source.name}"))

        self.stdout.write(self.style.SUCCESS(f"Auto-translated {len(results)} keys"))
