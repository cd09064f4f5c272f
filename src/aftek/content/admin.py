from django.contrib import admin

from .models import Article, Product, Project


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ["name", "sku", "category", "price", "in_stock", "is_active", "display_order"]
    list_filter = ["category", "in_stock", "is_active", "featured"]
    search_fields = ["name", "sku", "model"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ["title", "client", "location", "category", "is_active"]
    list_filter = ["category", "is_active"]
    search_fields = ["title", "client", "location"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    list_display = ["title", "author", "status", "published_at"]
    list_filter = ["status", "category"]
    search_fields = ["title", "excerpt", "body"]
    readonly_fields = ["created_at", "updated_at"]
