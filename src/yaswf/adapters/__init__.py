"""Adapters binding the core ports to a local host runtime."""
