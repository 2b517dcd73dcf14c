from app.client.api import ApiClient, ApiError
from app.client.session import (
    Page,
    SessionManager,
    SessionState,
    SubmissionInProgressError,
    decode_token_unverified,
)
from app.client.storage import FileTokenStorage, MemoryTokenStorage, StorageEvent, TokenStorage

__all__ = [
    "ApiClient",
    "ApiError",
    "FileTokenStorage",
    "MemoryTokenStorage",
    "Page",
    "SessionManager",
    "SessionState",
    "StorageEvent",
    "SubmissionInProgressError",
    "TokenStorage",
    "decode_token_unverified",
]
