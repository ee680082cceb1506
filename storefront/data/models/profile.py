from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from storefront.data.database import Base


class ProfileModel(Base):
    __tablename__ = "profiles"

    # same id as the identity provider's user
    id = Column(String(36), primary_key=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    postal_code = Column(String, nullable=True)
    country = Column(String, nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
