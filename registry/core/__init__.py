"""
Core utilities shared across the registry.

This package hosts configuration helpers, the error taxonomy used by
services/repositories and the logging setup.
"""
