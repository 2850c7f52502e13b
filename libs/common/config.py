"""Configuration management for the model initializer injector.

This module centralizes environment-driven configuration. It builds on
``pydantic_settings.BaseSettings`` so configuration can be provided via
environment variables, ``.env`` files, or defaults.

Highlights
- Strongly-typed settings with defaults matching the reserved identifiers
- The controller namespace honours the conventional ``POD_NAMESPACE`` variable
- Configuration is passed explicitly to the injector instead of being read
  from the environment at import time

Usage
- ``config = InjectorConfig()`` in the controller entrypoint
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from libs.model_initializer import constants


class BaseConfig(BaseSettings):
    """Base configuration class.

    Parameters are read from the process environment with the given names.
    Defaults keep local development convenient while still being explicit.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    mi_env: str = Field(default="local")

    # Logging
    mi_log_level: str = Field(default="INFO")
    mi_log_format: str = Field(default="json")


class InjectorConfig(BaseConfig):
    """Configuration for the model initializer injector.

    Extends ``BaseConfig`` with the location of the credentials config map and
    the init container image and mount paths.
    """

    # Credentials config map lookup
    mi_controller_namespace: str = Field(
        default=constants.DEFAULT_CONTROLLER_NAMESPACE,
        validation_alias=AliasChoices("mi_controller_namespace", "pod_namespace"),
    )
    mi_config_map_name: str = Field(default=constants.CONTROLLER_CONFIG_MAP_NAME)

    # Init container
    mi_initializer_image: str = Field(default=constants.MODEL_INITIALIZER_CONTAINER_IMAGE)
    mi_initializer_version: str = Field(default=constants.MODEL_INITIALIZER_CONTAINER_VERSION)

    # Mount paths
    mi_local_mount_path: str = Field(default=constants.DEFAULT_MODEL_LOCAL_MOUNT_PATH)
    mi_pvc_source_mount_path: str = Field(default=constants.PVC_SOURCE_MOUNT_PATH)

    mi_user_container_name: str = Field(default=constants.USER_CONTAINER_NAME)

    @property
    def initializer_image_ref(self) -> str:
        """Full ``image:tag`` reference of the init container."""
        return f"{self.mi_initializer_image}:{self.mi_initializer_version}"

