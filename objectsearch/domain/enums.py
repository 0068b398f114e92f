"""Domain enumerations for object search.

Enums represent fixed sets of domain values (e.g. metadata contexts).
"""

from enum import Enum


class MetadataContext(str, Enum):
    """Context in which an object type is available (user space or organization space)."""

    USER = "user"
    ORGANIZATION = "organization"
