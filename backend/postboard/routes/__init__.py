"""HTTP route handlers, one router per resource."""

from postboard.routes import health, index, posts, users

__all__ = ["health", "index", "posts", "users"]
