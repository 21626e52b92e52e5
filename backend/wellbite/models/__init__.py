from wellbite.models.refresh_token import RefreshToken
from wellbite.models.user import Role, User

__all__ = [
    "RefreshToken",
    "Role",
    "User",
]
