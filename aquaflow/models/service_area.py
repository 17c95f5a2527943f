from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
import uuid

from aquaflow.core.database import Base, utcnow


class ServiceArea(Base):
    __tablename__ = "service_areas"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    vendor_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    vendor_name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
