# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ASGI entrypoint.

Run with uvicorn edconnect.main:app or python -m edconnect.main.
"""

import uvicorn

from edconnect.api import create_app
from edconnect.core.config import get_settings

app = create_app()


def run() -> None:
    """Start the API server with the configured host, port and workers."""
    settings = get_settings()
    uvicorn.run(
        "edconnect.main:app",
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        reload=settings.api.reload,
    )


if __name__ == "__main__":
    run()
