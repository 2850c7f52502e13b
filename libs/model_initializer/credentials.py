"""Credential attachment contract for the model initializer.

The injector does not know how storage credentials are discovered or how they
are exposed to the init container. It depends only on ``CredentialBuilder``;
concrete builders are constructed from the controller's config map through
``load_credential_builder`` or supplied directly (e.g. a fake in tests).
"""

from abc import ABC, abstractmethod
import json
from typing import Any, Callable, Dict, List, Optional

from kubernetes.client import CoreV1Api, V1Container, V1Volume
from kubernetes.client.rest import ApiException
import structlog

from libs.common.config import InjectorConfig

from .constants import CREDENTIALS_CONFIG_KEY
from .errors import CredentialConfigurationError

logger = structlog.get_logger("model_initializer.credentials")


class CredentialBuilder(ABC):
    """Attaches storage credentials to the model initializer.

    Implementations may append volumes to ``volumes`` and add mounts or
    environment variables to ``container``. They must raise
    ``CredentialInjectionError`` when the located configuration is invalid or
    incomplete, and must not touch anything else on the pod.
    """

    @abstractmethod
    def attach_to(
        self,
        namespace: str,
        service_account_name: Optional[str],
        container: V1Container,
        volumes: List[V1Volume],
    ) -> None:
        """Attach credentials for ``service_account_name`` in ``namespace``."""
        pass


BuilderFactory = Callable[[CoreV1Api, Dict[str, Any]], CredentialBuilder]


def read_credentials_config(core_api: CoreV1Api, config: InjectorConfig) -> Dict[str, Any]:
    """Read and decode the credentials section of the controller config map.

    Raises ``CredentialConfigurationError`` when the map is missing or its
    ``credentials`` entry is absent or not a JSON object.
    """
    name = config.mi_config_map_name
    namespace = config.mi_controller_namespace

    try:
        config_map = core_api.read_namespaced_config_map(name=name, namespace=namespace)
    except ApiException as e:
        logger.error("Failed to find config map", name=name, namespace=namespace, status=e.status)
        raise CredentialConfigurationError(name, namespace, f"lookup failed ({e.status} {e.reason})") from e

    raw = (config_map.data or {}).get(CREDENTIALS_CONFIG_KEY)
    if raw is None:
        raise CredentialConfigurationError(name, namespace, f"missing '{CREDENTIALS_CONFIG_KEY}' entry")

    try:
        credentials = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CredentialConfigurationError(name, namespace, f"'{CREDENTIALS_CONFIG_KEY}' is not valid JSON: {e}") from e

    if not isinstance(credentials, dict):
        raise CredentialConfigurationError(name, namespace, f"'{CREDENTIALS_CONFIG_KEY}' must be a JSON object")

    return credentials


def load_credential_builder(
    core_api: CoreV1Api,
    builder_factory: BuilderFactory,
    config: Optional[InjectorConfig] = None,
) -> CredentialBuilder:
    """Build a ``CredentialBuilder`` from the controller config map.

    Parameters
    - core_api: Client used for the config map lookup (and by the builder)
    - builder_factory: Callable receiving the client and decoded credentials
    - config: Where to find the config map; defaults to ``InjectorConfig()``
    """
    config = config or InjectorConfig()
    credentials = read_credentials_config(core_api, config)

    logger.debug(
        "Loaded credentials config",
        name=config.mi_config_map_name,
        namespace=config.mi_controller_namespace,
        backends=sorted(credentials),
    )
    return builder_factory(core_api, credentials)
