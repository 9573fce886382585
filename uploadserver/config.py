"""Configuration settings for the upload server."""

import os
from common.constants import DEFAULT_STAGING_DIRECTORY, DEFAULT_LISTEN_HOST, DEFAULT_LISTEN_PORT


STAGING_DIRECTORY = os.environ.get("UPLOAD_STAGING_DIR", DEFAULT_STAGING_DIRECTORY)

LISTEN_HOST = os.environ.get("UPLOAD_HOST", DEFAULT_LISTEN_HOST)

LISTEN_PORT = int(os.environ.get("UPLOAD_PORT", str(DEFAULT_LISTEN_PORT)))
