from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Uuid
import uuid

from aquaflow.core.database import Base, utcnow


class Address(Base):
    __tablename__ = "addresses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    label = Column(String, nullable=False, default="Home")
    street = Column(String, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    zip_code = Column(String, nullable=False)
    is_default = Column(Boolean, nullable=False, default=False)
    area_id = Column(Uuid, ForeignKey("service_areas.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
