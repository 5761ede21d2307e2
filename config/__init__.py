"""Settings loading and validation."""
