from .client import GatewayClient, GatewayReply
from .state import Dashboard, Tab, TranscriptEntry, UserProfile

__all__ = [
    "Dashboard",
    "GatewayClient",
    "GatewayReply",
    "Tab",
    "TranscriptEntry",
    "UserProfile",
]
