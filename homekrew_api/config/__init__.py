"""Configuration module."""

from homekrew_api.config.settings import ClientSettings

__all__ = ["ClientSettings"]
