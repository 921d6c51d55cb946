"""Business logic for dashboards, clients, layouts and reference data."""
