import uuid

from django.db import migrations, models


def _content_fields():
    return [
        ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
        ("slug", models.SlugField(blank=True, max_length=200, unique=True)),
        ("tags", models.JSONField(blank=True, default=list)),
        ("featured", models.BooleanField(default=False)),
        ("display_order", models.PositiveIntegerField(default=0)),
        ("is_active", models.BooleanField(default=True)),
        ("translations", models.JSONField(blank=True, default=dict)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=_content_fields() + [
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("image", models.CharField(blank=True, max_length=500)),
                ("price", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("currency", models.CharField(default="TWD", max_length=3)),
                ("model", models.CharField(blank=True, help_text="Manufacturer model number", max_length=100)),
                ("sku", models.CharField(blank=True, max_length=100)),
                ("category", models.CharField(blank=True, max_length=100)),
                ("in_stock", models.BooleanField(default=True)),
                ("features", models.JSONField(blank=True, default=list)),
                ("specifications", models.JSONField(blank=True, default=dict)),
                ("show_price", models.BooleanField(default=True)),
                ("show_in_catalog", models.BooleanField(default=True)),
                ("max_quantity", models.PositiveIntegerField(default=99)),
            ],
            options={
                "verbose_name": "product",
                "verbose_name_plural": "products",
                "ordering": ["display_order", "-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Project",
            fields=_content_fields() + [
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                ("client", models.CharField(blank=True, max_length=200)),
                ("location", models.CharField(blank=True, max_length=200)),
                ("category", models.CharField(blank=True, max_length=100)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("technologies", models.JSONField(blank=True, default=list)),
                ("image", models.CharField(blank=True, max_length=500)),
            ],
            options={
                "verbose_name": "project",
                "verbose_name_plural": "projects",
                "ordering": ["display_order", "-created_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Article",
            fields=_content_fields() + [
                ("title", models.CharField(max_length=200)),
                ("excerpt", models.TextField(blank=True)),
                ("body", models.TextField(blank=True)),
                ("author", models.CharField(blank=True, max_length=200)),
                ("category", models.CharField(blank=True, max_length=100)),
                ("read_time", models.PositiveIntegerField(default=0, help_text="Minutes")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("review", "In review"),
                            ("published", "Published"),
                            ("archived", "Archived"),
                        ],
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("published_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "verbose_name": "article",
                "verbose_name_plural": "articles",
                "ordering": ["display_order", "-created_at"],
                "abstract": False,
            },
        ),
    ]
