"""Conversion pipeline configuration, metrics and orchestration."""
