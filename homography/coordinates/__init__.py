"""Applying and validating solved homographies."""
