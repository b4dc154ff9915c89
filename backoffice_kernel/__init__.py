"""
Back-office Kernel

Shared infrastructure for the restaurant back-office:
- Structured JSON logging with request-scoped context
- Typed, coded exception hierarchy
- Injectable clock
- SQLAlchemy declarative base and engine/session management
"""

__version__ = "0.1.0"
