"""Core domain: models, ports, configuration and conversion logic."""
