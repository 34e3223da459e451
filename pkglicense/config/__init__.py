"""Configuration models for pkglicense."""

from pkglicense.config.schema import CheckConfig

__all__ = ["CheckConfig"]
