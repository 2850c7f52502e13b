"""Common utilities shared across the injector.

Includes:
- ``config``: Pydantic-based configuration from environment variables.
- ``logging``: structured logging setup with structlog.
- ``metrics``: Prometheus metrics helpers.

Import pattern:
- from libs.common.config import InjectorConfig
- from libs.common.logging import setup_logging
"""
