"""Shopping cart: model, persistence tiers and the per-device cart store."""
