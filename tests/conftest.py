"""Shared fixtures for injector tests."""

from typing import List, Optional

import pytest
from kubernetes.client import (
    V1Container,
    V1Deployment,
    V1DeploymentSpec,
    V1EnvVar,
    V1LabelSelector,
    V1ObjectMeta,
    V1PodSpec,
    V1PodTemplateSpec,
    V1SecretVolumeSource,
    V1Volume,
    V1VolumeMount,
)

from libs.common.config import InjectorConfig
from libs.model_initializer.credentials import CredentialBuilder
from libs.model_initializer.errors import CredentialInjectionError


class RecordingCredentialBuilder(CredentialBuilder):
    """Fake builder that mounts a secret and records every call."""

    def __init__(self, secret_name: str = "storage-credentials"):
        self.secret_name = secret_name
        self.calls = []

    def attach_to(self, namespace, service_account_name, container, volumes):
        self.calls.append({
            "namespace": namespace,
            "service_account_name": service_account_name,
            "container": container.name,
            "volumes": [volume.name for volume in volumes],
        })
        volumes.append(V1Volume(
            name=self.secret_name,
            secret=V1SecretVolumeSource(secret_name=self.secret_name),
        ))
        container.volume_mounts.append(V1VolumeMount(
            name=self.secret_name,
            mount_path="/var/secrets",
            read_only=True,
        ))
        container.env = [V1EnvVar(name="STORAGE_CREDENTIALS", value="/var/secrets/creds.json")]


class NoopCredentialBuilder(CredentialBuilder):
    """Fake builder for public sources."""

    def attach_to(self, namespace, service_account_name, container, volumes):
        pass


class FailingCredentialBuilder(CredentialBuilder):
    """Fake builder that half-attaches credentials, then fails."""

    def attach_to(self, namespace, service_account_name, container, volumes):
        volumes.append(V1Volume(name="half-attached", secret=V1SecretVolumeSource(secret_name="x")))
        raise CredentialInjectionError(f"no credentials for service account {service_account_name}")


def make_deployment(
    containers: Optional[List[V1Container]] = None,
    init_containers: Optional[List[V1Container]] = None,
    volumes: Optional[List[V1Volume]] = None,
    service_account_name: Optional[str] = None,
    namespace: str = "models",
) -> V1Deployment:
    """Build a minimal deployment around the given pod spec pieces."""
    if containers is None:
        containers = [V1Container(name="user-container", image="seldonio/mlserver:1.3.5")]
    return V1Deployment(
        metadata=V1ObjectMeta(name="iris", namespace=namespace),
        spec=V1DeploymentSpec(
            selector=V1LabelSelector(match_labels={"app": "iris"}),
            template=V1PodTemplateSpec(
                metadata=V1ObjectMeta(labels={"app": "iris"}),
                spec=V1PodSpec(
                    containers=containers,
                    init_containers=init_containers,
                    volumes=volumes,
                    service_account_name=service_account_name,
                ),
            ),
        ),
    )


@pytest.fixture
def config(monkeypatch):
    """Injector config with defaults, independent of the process environment."""
    for name in ("POD_NAMESPACE", "MI_CONTROLLER_NAMESPACE", "MI_INITIALIZER_IMAGE",
                 "MI_INITIALIZER_VERSION", "MI_LOCAL_MOUNT_PATH", "MI_PVC_SOURCE_MOUNT_PATH",
                 "MI_CONFIG_MAP_NAME", "MI_USER_CONTAINER_NAME", "MI_ENV", "MI_LOG_LEVEL", "MI_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    return InjectorConfig()


@pytest.fixture
def deployment():
    return make_deployment()


@pytest.fixture
def user_container(deployment):
    return deployment.spec.template.spec.containers[0]


@pytest.fixture
def credential_builder():
    return RecordingCredentialBuilder()
