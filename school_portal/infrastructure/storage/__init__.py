# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Media storage backends."""

from school_portal.infrastructure.storage.backends import (
    LocalStorageBackend,
    S3StorageBackend,
    StorageBackend,
    StorageError,
    create_storage_backend,
    get_storage,
    join_url,
    reset_storage,
)

__all__ = [
    "StorageBackend",
    "StorageError",
    "LocalStorageBackend",
    "S3StorageBackend",
    "create_storage_backend",
    "get_storage",
    "join_url",
    "reset_storage",
]
