"""Business features: analytics, orders, bulk import."""
