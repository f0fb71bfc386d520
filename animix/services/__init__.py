"""Catalog orchestrators."""
