"""Client and CLI for a user's group memberships on an identity server."""

from .client import GroupMembershipClient
from .core.errors import HTTPStatusError, KcAdminError, RawBodyError
from .core.session import Session

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "GroupMembershipClient",
    "Session",
    "KcAdminError",
    "HTTPStatusError",
    "RawBodyError",
]
