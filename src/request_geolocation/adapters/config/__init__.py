"""Configuration adapters."""

from request_geolocation.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
