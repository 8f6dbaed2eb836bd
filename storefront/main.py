"""
Name: Backend ASGI Entrypoint (storefront.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path used by uvicorn and tests stable

Notes/Constraints:
  - No configuration or IO should live here; keep it thin and predictable
  - ASGI servers are configured to import storefront.main:app
"""

from storefront.api.main import app

__all__ = ["app"]
