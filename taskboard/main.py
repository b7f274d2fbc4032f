"""
Name: ASGI Entrypoint (taskboard.main)

Responsibilities:
  - Expose the FastAPI app for ASGI servers (uvicorn taskboard.main:app)
  - Keep this module thin: wiring lives in taskboard.api.main

Notes/Constraints:
  - Importing this module reads Settings from the environment
  - Tests build their own apps through create_app(settings)
"""

from taskboard.api.main import create_app

app = create_app()

__all__ = ["app"]
