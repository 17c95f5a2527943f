import structlog

from aquaflow.core.context import RequestContext
from aquaflow.core.errors import AccessError, guarded
from aquaflow.models.user import User
from aquaflow.schemas.user import UserCreate, UserUpdate

logger = structlog.get_logger(__name__)


class UserService:
    @staticmethod
    @guarded("create_user")
    def create_user(ctx: RequestContext, user_data: UserCreate) -> User:
        """Create a new user. A taken user_id surfaces as a constraint violation"""
        user = User(
            user_id=user_data.user_id,
            name=user_data.name,
            phone=user_data.phone,
            user_type=user_data.user_type,
            area_id=user_data.area_id,
            service_area=user_data.service_area,
        )
        ctx.db.add(user)
        ctx.db.commit()
        ctx.db.refresh(user)
        logger.info("user_created", user_id=user.user_id, user_type=user.user_type.value)
        return user

    @staticmethod
    @guarded("get_user")
    def get_user(ctx: RequestContext, user_pk) -> User:
        """Get user by primary key"""
        user = ctx.db.query(User).filter(User.id == user_pk).first()
        if not user:
            raise AccessError.not_found("User not found")
        return user

    @staticmethod
    @guarded("get_user_by_user_id")
    def get_user_by_user_id(ctx: RequestContext, user_id: str) -> User:
        """Get user by login handle"""
        user = ctx.db.query(User).filter(User.user_id == user_id).first()
        if not user:
            raise AccessError.not_found("User not found")
        return user

    @staticmethod
    @guarded("update_user")
    def update_user(ctx: RequestContext, user_pk, user_data: UserUpdate) -> User:
        """Update the caller's own profile; only fields present in the input are written"""
        user = ctx.db.query(User).filter(User.id == user_pk, User.id == ctx.user_pk).first()
        if not user:
            raise AccessError.not_found("User not found")

        for field, value in user_data.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
        ctx.db.commit()
        ctx.db.refresh(user)
        return user

    @staticmethod
    @guarded("delete_user")
    def delete_user(ctx: RequestContext, user_pk) -> bool:
        """Delete the caller's own account. Addresses, inventory and orders cascade"""
        deleted = ctx.db.query(User).filter(User.id == user_pk, User.id == ctx.user_pk).delete(
            synchronize_session=False
        )
        ctx.db.commit()
        if not deleted:
            raise AccessError.not_found("User not found")
        logger.info("user_deleted", user_pk=str(user_pk))
        return True
