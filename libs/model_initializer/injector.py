"""Injection of the model initializer into a deployment's pod spec.

The injector adds an init container that downloads the model into a scratch
volume before the user container starts. Changes are staged first and only
written to the pod spec once credentials have been attached, so a failure
leaves the deployment exactly as it was and the next reconcile can retry.
"""

import time
from typing import Optional, Sequence

from kubernetes.client import CoreV1Api, V1Container, V1Deployment, V1VolumeMount
import structlog

from libs.common.config import InjectorConfig
from libs.common.logging import setup_logging
from libs.common.metrics import MetricsCollector

from .constants import MODEL_INITIALIZER_CONTAINER_NAME
from .credentials import BuilderFactory, CredentialBuilder, load_credential_builder
from .errors import UserContainerNotFoundError
from .guard import find_container, is_injected
from .volumes import build_provisioning_plan, merge_by_name

logger = structlog.get_logger("model_initializer.injector")


class ModelInitializerInjector:
    """Mutates deployments so a model is provisioned by an init container."""

    def __init__(
        self,
        credential_builder: CredentialBuilder,
        config: Optional[InjectorConfig] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        """Configure an injector.

        Parameters
        - credential_builder: Attaches storage credentials to the init container
        - config: Image, mount paths and config map location
        - metrics: Optional collector recording injection outcomes
        """
        self.credential_builder = credential_builder
        self.config = config or InjectorConfig()
        self.metrics = metrics

    @classmethod
    def from_cluster(
        cls,
        core_api: CoreV1Api,
        builder_factory: BuilderFactory,
        config: Optional[InjectorConfig] = None,
        metrics: Optional[MetricsCollector] = None,
        configure_logs: bool = True,
    ) -> "ModelInitializerInjector":
        """Create an injector whose credential builder comes from the config map.

        This is the controller entry point: unless ``configure_logs`` is false,
        logging is set up from ``config`` before the config map is read.
        """
        config = config or InjectorConfig()
        if configure_logs:
            setup_logging(config)
        credential_builder = load_credential_builder(core_api, builder_factory, config)
        return cls(credential_builder, config=config, metrics=metrics)

    def build_init_container(self, source_uri: str, volume_mounts: Sequence[V1VolumeMount]) -> V1Container:
        """Init container downloading ``source_uri`` into the local mount path."""
        return V1Container(
            name=MODEL_INITIALIZER_CONTAINER_NAME,
            image=self.config.initializer_image_ref,
            args=[source_uri, self.config.mi_local_mount_path],
            volume_mounts=list(volume_mounts),
        )

    def inject(
        self,
        deployment: V1Deployment,
        user_container: Optional[V1Container],
        source_uri: str,
        service_account_name: Optional[str] = None,
    ) -> bool:
        """Inject the model initializer into ``deployment``.

        Parameters
        - deployment: Workload whose ``spec.template.spec`` is mutated in place
        - user_container: Container (within that pod spec) serving the model;
          ``None`` selects the container named ``mi_user_container_name``
        - source_uri: Model location; ``pvc://`` URIs are mounted from the claim
        - service_account_name: Overrides the pod's service account for
          credential lookup

        Returns
        - ``True`` when the pod spec was mutated, ``False`` when the model
          initializer was already present.

        Raises ``UserContainerNotFoundError``, ``InvalidURIError`` or the
        credential builder's error; in every case nothing is written to the
        deployment. The staged volume list is a new list but shares the
        existing ``V1Volume`` objects, so this holds only while the credential
        builder leaves pre-existing volumes untouched, as ``CredentialBuilder``
        requires.
        """
        started = time.perf_counter()
        pod_spec = deployment.spec.template.spec
        namespace = deployment.metadata.namespace if deployment.metadata else None
        log = logger.bind(namespace=namespace, source_uri=source_uri)

        if is_injected(pod_spec):
            log.debug("Model initializer already injected")
            self._record("skipped", started)
            return False

        try:
            if user_container is None:
                user_container = self.resolve_user_container(deployment)
            log = log.bind(container=user_container.name)

            plan = build_provisioning_plan(
                source_uri,
                local_mount_path=self.config.mi_local_mount_path,
                pvc_mount_path=self.config.mi_pvc_source_mount_path,
            )
            init_container = self.build_init_container(plan.source_uri, plan.init_mounts)

            # The credential builder may append its own volumes to the staged list.
            staged_volumes = merge_by_name(pod_spec.volumes, plan.volumes)
            service_account = service_account_name or pod_spec.service_account_name
            self.credential_builder.attach_to(namespace, service_account, init_container, staged_volumes)
        except Exception as e:
            log.error("Failed to inject model initializer", error=str(e), error_type=type(e).__name__)
            self._record("failed", started)
            raise

        user_container.volume_mounts = merge_by_name(user_container.volume_mounts, [plan.user_mount])
        pod_spec.volumes = staged_volumes
        pod_spec.init_containers = list(pod_spec.init_containers or []) + [init_container]

        log.info(
            "Injected model initializer",
            effective_uri=plan.source_uri,
            service_account=service_account,
            volumes=[volume.name for volume in plan.volumes],
        )
        self._record("injected", started)
        return True

    def resolve_user_container(self, deployment: V1Deployment) -> V1Container:
        """Container named ``mi_user_container_name`` in the pod spec."""
        name = self.config.mi_user_container_name
        container = find_container(deployment.spec.template.spec.containers, name)
        if container is None:
            raise UserContainerNotFoundError(name)
        return container

    def _record(self, outcome: str, started: float) -> None:
        if self.metrics is not None:
            self.metrics.record_injection(outcome, time.perf_counter() - started)


def inject_model_initializer(
    deployment: V1Deployment,
    user_container: Optional[V1Container],
    source_uri: str,
    credential_builder: CredentialBuilder,
    service_account_name: Optional[str] = None,
    config: Optional[InjectorConfig] = None,
) -> bool:
    """Convenience wrapper around ``ModelInitializerInjector.inject``."""
    injector = ModelInitializerInjector(credential_builder, config=config)
    return injector.inject(deployment, user_container, source_uri, service_account_name)
