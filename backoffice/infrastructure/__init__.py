"""Infrastructure adapters: persistence, external services, security."""
