"""Domain-layer abstractions."""
