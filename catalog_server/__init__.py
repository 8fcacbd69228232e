"""HTTP service for the item catalog."""
