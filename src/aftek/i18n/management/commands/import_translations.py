"""Management command to load locale files into the website text table."""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from aftek.i18n.locales import Language, LocaleFileError, load_locale_dir
from aftek.i18n.services import import_dictionary


class Command(BaseCommand):
    help = "Import locale files into the website text table"

    def add_arguments(self, parser):
        parser.add_argument(
            "--locales-dir",
            default=None,
            help="Directory of <language>.json locale files (default: settings.LOCALES_DIR)",
        )
        parser.add_argument(
            "--language",
            default=None,
            help="Only import this language",
        )

    def handle(self, *args, **options):
        locales_dir = options["locales_dir"] or settings.LOCALES_DIR
        try:
            dictionaries = load_locale_dir(locales_dir)
        except LocaleFileError as e:
            raise CommandError(str(e)) from e

        if options["language"]:
            language = Language.from_code(options["language"])
            if language is None:
                raise CommandError(f"Unsupported language: {options['language']}")
            dictionaries = {code: d for code, d in dictionaries.items() if code == language.value}
            if not dictionaries:
                raise CommandError(f"No locale file for {language.value} in {locales_dir}")

        self.stdout.write(f"Importing {len(dictionaries)} locale files from {locales_dir}")

        total_success = total_errors = 0
        for code, dictionary in dictionaries.items():
            if Language.from_code(code) is None:
                self.stdout.write(self.style.WARNING(f"  Skipping unsupported language: {code}"))
                continue

            success, errors = import_dictionary(dictionary)
            total_success += success
            total_errors += errors
            self.stdout.write(f"  {code}: {success} successful, {errors} errors")

        self.stdout.write(self.style.SUCCESS(
            f"\nImport complete: {total_success} translations imported, {total_errors} errors"
        ))
        if total_errors:
            raise CommandError(f"{total_errors} translations failed to import")
