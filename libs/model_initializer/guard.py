"""Idempotency checks for model initializer injection."""

from typing import Optional, Sequence

from kubernetes.client import V1Container, V1PodSpec

from .constants import MODEL_INITIALIZER_CONTAINER_NAME


def find_container(containers: Optional[Sequence[V1Container]], name: str) -> Optional[V1Container]:
    """Return the container called ``name``, or ``None``."""
    for container in containers or []:
        if container.name == name:
            return container
    return None


def is_injected(pod_spec: V1PodSpec) -> bool:
    """Whether the pod spec already carries the model initializer."""
    return find_container(pod_spec.init_containers, MODEL_INITIALIZER_CONTAINER_NAME) is not None
