"""
Core utilities shared across the credit card API.

This package hosts configuration (environment driven Settings), logging setup
and small URL helpers. Routers, services and repositories depend on these
primitives instead of reading the environment themselves.
"""
