"""Shared data model, enums, errors and configuration."""
