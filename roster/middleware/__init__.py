"""ASGI middleware."""

from roster.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
