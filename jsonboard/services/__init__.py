"""
High-level use cases for the jsonboard API.

Service modules orchestrate the store and the domain helpers (id allocation,
soft-delete formatting). Routers call these services instead of manipulating
the JSON document directly.
"""
