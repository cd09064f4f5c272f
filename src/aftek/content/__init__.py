"""Site content: products, projects and articles managed from the admin."""
