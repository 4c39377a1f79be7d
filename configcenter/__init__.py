"""Configuration center service: module groups, modules and update endpoints."""

__version__ = "0.1.0"
__all__ = ["dbinit", "handler", "main", "model", "repository"]