"""Community back office: application lifecycle and access-control engine."""
