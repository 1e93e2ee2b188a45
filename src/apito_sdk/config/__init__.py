"""Configuration loading for the Apito SDK."""

from apito_sdk.config.loader import config_from_env, load_config

__all__ = ["config_from_env", "load_config"]
