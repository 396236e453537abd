"""HTTP middlewares shared by every router."""

from .trace_id import trace_id_middleware

__all__ = ["trace_id_middleware"]
