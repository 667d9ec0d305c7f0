"""
High-level use cases for the credit card API.

Routers call these services instead of touching repositories or sessions
directly.
"""
