"""CLI entry point for the API Explorer."""

from __future__ import annotations

import uvicorn

from .config import get_settings
from .logging import configure_logging
from .server import build_app


def main() -> None:
    settings = get_settings()
    configure_logging(settings.explorer_log_level)

    app = build_app(settings)
    uvicorn.run(app, host=settings.explorer_host, port=settings.explorer_port)


if __name__ == "__main__":
    main()
