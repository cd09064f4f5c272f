"""Aftek website: product catalog, shopping cart and multi-language content."""
