"""Ambient configuration: logging setup and environment settings."""
