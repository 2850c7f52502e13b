"""Parsing of claim backed model source URIs."""

from typing import Tuple

from .constants import PVC_URI_PREFIX
from .errors import InvalidURIError


def is_pvc_uri(uri: str) -> bool:
    """Return ``True`` when ``uri`` points at a persistent volume claim."""
    return uri.startswith(PVC_URI_PREFIX)


def parse_pvc_uri(uri: str) -> Tuple[str, str]:
    """Split ``pvc://<claim>/[path]`` into the claim name and sub-path.

    The sub-path is empty when the URI names only the claim. A URI without a
    claim name raises ``InvalidURIError``.
    """
    remainder = uri[len(PVC_URI_PREFIX):] if is_pvc_uri(uri) else uri
    parts = remainder.split("/")
    # An empty first segment (``pvc:///x``) is rejected rather than mapped
    # to a claim named "".
    if not parts[0]:
        raise InvalidURIError(uri)

    if len(parts) > 1:
        return parts[0], "/".join(parts[1:])
    return parts[0], ""
