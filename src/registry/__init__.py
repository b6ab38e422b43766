# Color registry package
from .registry import ColorRegistry, OwnershipLedger
from .codec import decode, encode, normalize
from .pricing import PricingPolicy, Tier, tier_of
from .ledger import ColorLedger, ColorEntry
from .journal import Journal
from .events import RegistryEvents
from .access_control import AccessControl, AccessControlled
from .upgrade import UpgradeLock, UpgradeDelegate, UpgradeGated
from .treasury import Treasury, PayoutChannel, InMemoryPayouts
from .notifications import ReceiverDirectory, TokenReceiver
from .renderer import MetadataRenderer, decode_data_uri, render_document, render_svg
from .logger import EventLogger
from .errors import (
    RegistryError, ErrorCode, ErrorCategory, ErrorResponse,
    InvalidFormatError, OutOfRangeError, NameTooLongError, InvalidTargetError,
    NotOwnerError, NotAuthorizedError, InsufficientPaymentError, UpgradeLockedError,
    NotFoundError, AlreadyExistsError, NotificationRejectedError, TransferFailedError,
)
from .constants import ID_SPACE, MAX_ID, NO_PRINCIPAL

__all__ = [
    "ColorRegistry", "OwnershipLedger",
    "decode", "encode", "normalize",
    "PricingPolicy", "Tier", "tier_of",
    "ColorLedger", "ColorEntry",
    "Journal", "RegistryEvents",
    "AccessControl", "AccessControlled",
    "UpgradeLock", "UpgradeDelegate", "UpgradeGated",
    "Treasury", "PayoutChannel", "InMemoryPayouts",
    "ReceiverDirectory", "TokenReceiver",
    "MetadataRenderer", "decode_data_uri", "render_document", "render_svg",
    "EventLogger",
    # Errors
    "RegistryError", "ErrorCode", "ErrorCategory", "ErrorResponse",
    "InvalidFormatError", "OutOfRangeError", "NameTooLongError", "InvalidTargetError",
    "NotOwnerError", "NotAuthorizedError", "InsufficientPaymentError", "UpgradeLockedError",
    "NotFoundError", "AlreadyExistsError", "NotificationRejectedError", "TransferFailedError",
    "ID_SPACE", "MAX_ID", "NO_PRINCIPAL",
]
