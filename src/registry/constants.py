"""Centralized constants for the registry module.

Identifier-space bounds, the tier partition and the default registry
identity live here to avoid magic numbers scattered across modules.
"""

# Identifiers are 24-bit RGB values
ID_BITS = 24
ID_SPACE = 1 << ID_BITS  # 16,777,216
MAX_ID = ID_SPACE - 1

# Canonical hex text is one character per nibble
HEX_LENGTH = ID_BITS // 4

# "No principal" sentinel: source of a creation, destination of a destruction
NO_PRINCIPAL = ""

# Default id the registry uses for itself (the administrative identity)
DEFAULT_REGISTRY_ID = "color_registry"

# Tier membership: black and white
EXTRA_PREMIUM_IDS = frozenset({0x000000, 0xFFFFFF})

# Tier membership: the pure primary and secondary colors
PREMIUM_IDS = frozenset({
    0x0000FF,  # blue
    0x00FF00,  # green
    0xFF0000,  # red
    0x00FFFF,  # cyan
    0xFF00FF,  # magenta
    0xFFFF00,  # yellow
})

# Event types recorded by the registry
EVENT_TRANSFER = "Transfer"
EVENT_RENAMED = "ColorRenamed"
EVENT_UPGRADES_LOCKED = "UpgradesLocked"
EVENT_RECEIVED = "Received"
EVENT_WITHDRAWN = "Withdrawn"
EVENT_PRINCIPAL_TRANSFERRED = "PrincipalTransferred"
EVENT_UPGRADED = "Upgraded"
