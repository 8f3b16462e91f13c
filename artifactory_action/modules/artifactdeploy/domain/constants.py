"""Constants shared by the artifact deploy module."""

CHECKSUM_FILE_EXTENSIONS = (".md5", ".sha1", ".sha256", ".sha512")

METADATA_FILES = frozenset({"maven-metadata.xml", "maven-metadata-local.xml"})

SIGNATURE_FILE_EXTENSION = ".asc"

# Artifacts at or below this size are always uploaded with their content.
CHECKSUM_DEPLOY_THRESHOLD = 10 * 1024

MAX_CONTENT_DEPLOY_ATTEMPTS = 3

DEFAULT_RETRY_DELAY_SECONDS = 5.0

# HTTP statuses that the repository sporadically returns for valid uploads.
FLAKY_STATUS_CODES = frozenset({400, 404})

BUILD_NAME_PROPERTY = "build.name"
BUILD_NUMBER_PROPERTY = "build.number"
BUILD_TIMESTAMP_PROPERTY = "build.timestamp"
