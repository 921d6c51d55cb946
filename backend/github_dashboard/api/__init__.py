"""HTTP API: routes, request/response schemas and dependencies."""
