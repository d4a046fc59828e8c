"""HTTP surface for collection review."""
