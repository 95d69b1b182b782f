"""Catalog core: domain models, configuration and pure services."""
