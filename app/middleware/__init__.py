"""HTTP middleware applied in app.main (first added = innermost)."""

from app.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
