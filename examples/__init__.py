"""Example catalogs and demos."""
