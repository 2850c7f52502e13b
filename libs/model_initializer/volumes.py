"""Volumes and mounts needed to provision a model into a pod.

A scratch ``emptyDir`` volume is always shared between the init container
(read-write) and the user container (read-only) at the same path. Claim
backed sources additionally get the claim mounted read-only into the init
container, and the source URI is rewritten to point inside that mount.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TypeVar

from kubernetes.client import (
    V1EmptyDirVolumeSource,
    V1PersistentVolumeClaimVolumeSource,
    V1Volume,
    V1VolumeMount,
)
import structlog

from .constants import (
    DEFAULT_MODEL_LOCAL_MOUNT_PATH,
    MODEL_INITIALIZER_VOLUME_NAME,
    PVC_SOURCE_MOUNT_PATH,
    PVC_SOURCE_VOLUME_NAME,
)
from .uri import is_pvc_uri, parse_pvc_uri

logger = structlog.get_logger("model_initializer.volumes")

Named = TypeVar("Named")


@dataclass
class ProvisioningPlan:
    """Everything the orchestrator needs to wire a model into a pod.

    Nothing here is attached to a pod spec yet; the orchestrator decides when
    to commit it.
    """

    source_uri: str
    """Source URI handed to the init container, rewritten for claims."""

    user_mount: V1VolumeMount
    """Read-only mount of the scratch volume for the user container."""

    volumes: List[V1Volume] = field(default_factory=list)
    init_mounts: List[V1VolumeMount] = field(default_factory=list)


def build_scratch_volume() -> V1Volume:
    """Ephemeral volume shared by the init container and the user container."""
    return V1Volume(
        name=MODEL_INITIALIZER_VOLUME_NAME,
        empty_dir=V1EmptyDirVolumeSource(),
    )


def build_claim_volume(claim_name: str) -> V1Volume:
    """Volume referencing the persistent volume claim holding the model."""
    return V1Volume(
        name=PVC_SOURCE_VOLUME_NAME,
        persistent_volume_claim=V1PersistentVolumeClaimVolumeSource(claim_name=claim_name),
    )


def rewrite_claim_uri(mount_path: str, sub_path: str) -> str:
    """Point a claim sub-path inside its mount without doubling separators."""
    return mount_path.rstrip("/") + "/" + sub_path.lstrip("/")


def build_provisioning_plan(
    source_uri: str,
    local_mount_path: str = DEFAULT_MODEL_LOCAL_MOUNT_PATH,
    pvc_mount_path: str = PVC_SOURCE_MOUNT_PATH,
) -> ProvisioningPlan:
    """Derive volumes, mounts and the effective source URI for ``source_uri``.

    Raises ``InvalidURIError`` for a claim URI without a claim name.
    """
    volumes: List[V1Volume] = []
    init_mounts: List[V1VolumeMount] = []

    if is_pvc_uri(source_uri):
        claim_name, sub_path = parse_pvc_uri(source_uri)

        volumes.append(build_claim_volume(claim_name))
        init_mounts.append(V1VolumeMount(
            name=PVC_SOURCE_VOLUME_NAME,
            mount_path=pvc_mount_path,
            read_only=True,
        ))

        rewritten = rewrite_claim_uri(pvc_mount_path, sub_path)
        logger.debug("Rewrote claim source URI", source_uri=source_uri, claim=claim_name, rewritten=rewritten)
        source_uri = rewritten

    volumes.append(build_scratch_volume())
    init_mounts.append(V1VolumeMount(
        name=MODEL_INITIALIZER_VOLUME_NAME,
        mount_path=local_mount_path,
        read_only=False,
    ))

    user_mount = V1VolumeMount(
        name=MODEL_INITIALIZER_VOLUME_NAME,
        mount_path=local_mount_path,
        read_only=True,
    )

    return ProvisioningPlan(
        source_uri=source_uri,
        user_mount=user_mount,
        volumes=volumes,
        init_mounts=init_mounts,
    )


def merge_by_name(existing: Optional[Sequence[Named]], additions: Sequence[Named]) -> List[Named]:
    """Return ``existing`` plus ``additions`` keeping names unique.

    An addition replaces an existing entry of the same name in place; other
    additions are appended in order. Works for volumes and volume mounts.
    """
    merged = list(existing or [])
    positions = {item.name: index for index, item in enumerate(merged)}

    for item in additions:
        if item.name in positions:
            logger.warning("Replacing entry with reserved name", name=item.name)
            merged[positions[item.name]] = item
        else:
            positions[item.name] = len(merged)
            merged.append(item)

    return merged
