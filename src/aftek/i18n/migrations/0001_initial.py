from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="WebsiteText",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(max_length=255)),
                ("section", models.CharField(blank=True, db_index=True, max_length=100)),
                (
                    "language",
                    models.CharField(
                        choices=[
                            ("en", "English"),
                            ("ja", "日本語"),
                            ("ko", "한국어"),
                            ("th", "ไทย"),
                            ("vi", "Tiếng Việt"),
                            ("zh-Hans", "简体中文"),
                            ("zh-Hant", "繁體中文"),
                        ],
                        db_index=True,
                        max_length=10,
                    ),
                ),
                ("value", models.TextField(blank=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "website text",
                "verbose_name_plural": "website texts",
                "ordering": ["section", "key", "language"],
            },
        ),
        migrations.AddConstraint(
            model_name="websitetext",
            constraint=models.UniqueConstraint(fields=("key", "language"), name="unique_website_text_key_language"),
        ),
    ]
