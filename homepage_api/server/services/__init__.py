"""Business logic services for the API layer."""
