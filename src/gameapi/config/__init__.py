"""Configuration module for the game API client.

This module provides the Pydantic-based client configuration, with support
for YAML file and environment variable loading.
"""

from gameapi.config.client_config import ENV_PREFIX, ClientConfig

__all__ = [
    "ClientConfig",
    "ENV_PREFIX",
]
