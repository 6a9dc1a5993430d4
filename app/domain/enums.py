"""Domain enumerations for the Students API.

Enums represent fixed sets of values shared across layers.
"""

from enum import Enum


class CacheBackendState(str, Enum):
    """Connection state of the response cache, decided once at startup.

    CONNECTED means the networked store (Redis) answered at startup.
    FALLBACK means the in-process store is serving instead; it is not
    shared between instances and is never upgraded back to CONNECTED.
    """

    CONNECTED = "connected"
    FALLBACK = "fallback"
