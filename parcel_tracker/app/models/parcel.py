"""
Parcel database model.

Single table holding every tracked shipment.
"""

from sqlalchemy import Column, Integer, Text
from parcel_tracker.app.db.session import Base
from parcel_tracker.app.models.parcel_enums import ParcelStatus


class Parcel(Base):
    """
    Parcel model.

    `number` uses SQLite AUTOINCREMENT so a deleted parcel's number is never
    handed out again. `created_at` is stored as RFC3339 text in UTC.
    """
    __tablename__ = "parcel"

    number = Column(Integer, primary_key=True, autoincrement=True)

    # Ownership
    client = Column(Integer, nullable=False, index=True)

    # Lifecycle
    status = Column(Text, nullable=False, default=ParcelStatus.REGISTERED.value,
                    server_default=ParcelStatus.REGISTERED.value)
    address = Column(Text, nullable=False)

    # Timestamps
    created_at = Column(Text, nullable=False)

    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self):
        return f"<Parcel(number={self.number}, client={self.client}, status='{self.status}')>"
