"""
Event administration for the events page.

Holds the screen controller, its payload rules, the toast notifier and the
store implementations it talks to.
"""

from .controller import AdminMode, AdminSnapshot, EventAdminController
from .notifications import Notifier, Toast, ToastLevel
from .store import (
    AuthProvider,
    CategorySource,
    EventStore,
    SqlCategorySource,
    SqlEventStore,
    StaticAuthProvider,
)

__all__ = [
    "AdminMode",
    "AdminSnapshot",
    "EventAdminController",
    "Notifier",
    "Toast",
    "ToastLevel",
    "AuthProvider",
    "CategorySource",
    "EventStore",
    "SqlCategorySource",
    "SqlEventStore",
    "StaticAuthProvider",
]
