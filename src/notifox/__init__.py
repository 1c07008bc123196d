from notifox.core.http.errors import (
    NotifoxAPIError,
    NotifoxAuthenticationError,
    NotifoxCancelledError,
    NotifoxConfigurationError,
    NotifoxConnectionError,
    NotifoxError,
    NotifoxInsufficientBalanceError,
    NotifoxRateLimitError,
    NotifoxValidationError,
)
from notifox.config import ClientConfig, __version__, load_client_config, load_config_file
from notifox.schemas import AlertRequest, AlertResponse, Channel, PartsRequest, PartsResponse
from notifox.client import NotifoxClient
from notifox.async_client import AsyncNotifoxClient

__all__ = [
    "__version__",
    "AsyncNotifoxClient",
    "NotifoxClient",
    "ClientConfig",
    "load_client_config",
    "load_config_file",
    "AlertRequest",
    "AlertResponse",
    "Channel",
    "PartsRequest",
    "PartsResponse",
    "NotifoxError",
    "NotifoxAPIError",
    "NotifoxAuthenticationError",
    "NotifoxCancelledError",
    "NotifoxConfigurationError",
    "NotifoxConnectionError",
    "NotifoxInsufficientBalanceError",
    "NotifoxRateLimitError",
    "NotifoxValidationError",
]
