"""Reserved identifiers for model initializer injection.

The names below must match exactly between releases: the idempotency check
and the wiring of mounts rely on them.
"""

# Init container
MODEL_INITIALIZER_CONTAINER_NAME = "model-initializer"
MODEL_INITIALIZER_CONTAINER_IMAGE = "gcr.io/kfserving/model-initializer"
MODEL_INITIALIZER_CONTAINER_VERSION = "latest"

# Scratch volume shared by the init container and the user container
MODEL_INITIALIZER_VOLUME_NAME = "kfserving-provision-location"
DEFAULT_MODEL_LOCAL_MOUNT_PATH = "/mnt/models"

# Claim backed sources
PVC_URI_PREFIX = "pvc://"
PVC_SOURCE_VOLUME_NAME = "kfserving-pvc-source"
PVC_SOURCE_MOUNT_PATH = "/mnt/pvc"

USER_CONTAINER_NAME = "user-container"

# Credentials config map
DEFAULT_CONTROLLER_NAMESPACE = "seldon-system"
CONTROLLER_CONFIG_MAP_NAME = "seldon-config"
CREDENTIALS_CONFIG_KEY = "credentials"
