"""Debian/GNOME desktop provisioning.

Core design goals:
- Ordered, declarative step catalog
- Idempotent steps with an explicit failure policy each
- One timestamped run log per invocation
"""

__all__ = []
