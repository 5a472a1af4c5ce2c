"""Prepare a package manifest for publishing from its build output directory."""

__version__ = "0.1.0"
