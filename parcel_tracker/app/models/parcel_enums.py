"""
Parcel Status labels.
"""

import enum


class ParcelStatus(str, enum.Enum):
    """
    Well-known parcel statuses.

    Status flow:
        REGISTERED → SENT → DELIVERED

    The status column is free text, so carriers may use any other label.
    Only REGISTERED is special: address changes and deletion are allowed
    in that state alone.
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"
