"""Custom exception classes for the upload server."""


class UploadServerException(Exception):
    """
    Base exception class for all upload server errors.
    """
    pass


class InvalidChunkRequestError(UploadServerException):
    """
    Raised when a chunk upload request is malformed (missing payload,
    missing or non-numeric index). Raised before anything is stored.
    """
    pass


class ChunkStorageError(UploadServerException):
    """
    Raised when a chunk cannot be written to the staging directory.
    """
    pass
