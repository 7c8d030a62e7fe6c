"""School Portal Backend.

Content-management service for a school website: public news, documents,
staff directory, gallery and introduction pages, plus the admin console API
that edits them.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
