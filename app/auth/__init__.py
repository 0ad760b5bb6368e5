# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Verifies Supabase Auth JWTs for staff-only endpoints.
#
# Usage:
#   from app.auth import get_staff_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_staff_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_current_user, get_staff_user
from app.auth.models import AuthUser

__all__ = [
    "get_current_user",
    "get_staff_user",
    "AuthUser",
]
