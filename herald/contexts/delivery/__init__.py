"""
Delivery Context

Responsibilities:
- Exposes the generation pipeline over HTTP (FastAPI)
- Derives the rate-limit client key from each request
- Translates pipeline errors into status codes and {"error": ...} bodies

Owns: Wire schemas, routes, error-to-status mapping
Never: Decides validation rules, templates, or provider behavior
"""

from herald.contexts.delivery.app import create_app

__all__ = ["create_app"]
