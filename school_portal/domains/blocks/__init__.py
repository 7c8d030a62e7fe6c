# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Display block domain package."""

from school_portal.domains.blocks.service import (
    BlockNotFoundError,
    BlockService,
    BlockServiceError,
    to_block_response,
)

__all__ = ["BlockService", "BlockServiceError", "BlockNotFoundError", "to_block_response"]
