"""Request-scoped context passed to every domain access function.

The authenticated identity arrives as an e-mail address issued by the
external identity provider. Its local part is the application ``user_id``
(``alice@aquaflow.local`` maps to the ``users`` row with ``user_id == "alice"``).
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from aquaflow.core.config import settings
from aquaflow.core.database import get_db
from aquaflow.models.user import User, UserType


@dataclass
class RequestContext:
    db: Session
    user: Optional[User] = None

    @property
    def user_pk(self):
        return self.user.id if self.user is not None else None

    @property
    def is_vendor(self) -> bool:
        return self.user is not None and self.user.user_type == UserType.VENDOR

    @property
    def is_customer(self) -> bool:
        return self.user is not None and self.user.user_type == UserType.CUSTOMER


def user_id_from_identity(identity: str) -> str:
    """Reduce an identity e-mail to the application user_id"""
    identity = identity.strip()
    suffix = f"@{settings.auth_email_domain}"
    if identity.lower().endswith(suffix.lower()):
        return identity[: -len(suffix)]
    return identity


def get_request_context(request: Request, db: Session = Depends(get_db)) -> RequestContext:
    """Dependency resolving the optional caller identity"""
    identity = request.headers.get(settings.identity_header)
    if not identity or not identity.strip():
        return RequestContext(db=db)

    user = db.query(User).filter(User.user_id == user_id_from_identity(identity)).first()
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown identity")
    return RequestContext(db=db, user=user)


def require_user(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
    """Dependency to require an authenticated caller"""
    if ctx.user is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return ctx


def require_vendor(ctx: RequestContext = Depends(require_user)) -> RequestContext:
    """Dependency to require a vendor caller"""
    if not ctx.is_vendor:
        raise HTTPException(status_code=403, detail="Vendor account required")
    return ctx


def require_customer(ctx: RequestContext = Depends(require_user)) -> RequestContext:
    """Dependency to require a customer caller"""
    if not ctx.is_customer:
        raise HTTPException(status_code=403, detail="Customer account required")
    return ctx
