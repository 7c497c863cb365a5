"""
Middleware for the MentorConnect server.

Request timing and logging shared by every route.
"""

from .logfire_middleware import LogfireMiddleware

__all__ = ["LogfireMiddleware"]
