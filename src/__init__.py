"""Farm zone classification system."""
