"""ASGI entrypoint serving the deploy details API, e.g. `uvicorn artifactdeploy.main:app`."""

from __future__ import annotations

from .factory import create_app

app = create_app()
