"""Framework integrations for storefront-catalog."""
