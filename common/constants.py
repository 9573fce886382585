"""Project-wide constants (chunk naming, copy piece size, default address)."""

CHUNK_NAME_SEPARATOR: str = "_part_"

COPY_PIECE_SIZE_BYTES: int = 64 * 1024  # 64 KiB per write while staging a chunk

DEFAULT_STAGING_DIRECTORY: str = "temp"

DEFAULT_LISTEN_HOST: str = "0.0.0.0"

DEFAULT_LISTEN_PORT: int = 8080
