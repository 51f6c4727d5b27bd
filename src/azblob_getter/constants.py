"""Constants for azblob-getter."""

# Query parameter carrying a storage account shared key
ACCESS_KEY_PARAM = "access_key"

# Query parameter present in every SAS token
SAS_SIGNATURE_PARAM = "sig"

# Second host label of a blob endpoint (<account>.blob.<base-domain>)
BLOB_HOST_MARKER = "blob"

# Object name separator used by the store
SEPARATOR = "/"

# Largest page the List Blobs API returns
MAX_PAGE_SIZE = 5000

# Settings
CONFIG_FILE = "azblob-getter.yaml"
CONFIG_ENV_VAR = "AZBLOB_GETTER_CONFIG"
ENV_PREFIX = "AZBLOB_GETTER_"

# Version
GETTER_VERSION = "0.1.0"
