"""Configuration management resources, tasks and utilities."""

__version__ = "0.5.0"