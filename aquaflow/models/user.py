from sqlalchemy import Column, String, DateTime, ForeignKey, Enum, Uuid
import enum
import uuid

from aquaflow.core.database import Base, utcnow


class UserType(str, enum.Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    user_type = Column(
        Enum(
            UserType,
            name="user_type",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
        index=True,
    )
    area_id = Column(
        Uuid,
        ForeignKey("service_areas.id", ondelete="SET NULL", use_alter=True, name="users_area_id_fkey"),
        nullable=True,
    )
    service_area = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    @property
    def is_vendor(self) -> bool:
        return self.user_type == UserType.VENDOR
