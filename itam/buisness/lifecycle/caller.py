"""
Caller - explicit identity handed to every lifecycle command
"""

from dataclasses import dataclass
from typing import Optional, Union
from itam.data.core.enums import UserRole


@dataclass(frozen=True)
class Caller:
    role: Union[UserRole, str, int]
    user_id: Optional[int] = None
    name: str = 'system'

    @classmethod
    def from_user(cls, user) -> 'Caller':
        return cls(role=user.role, user_id=user.id, name=user.username)

    @classmethod
    def system(cls) -> 'Caller':
        """Admin-level caller used by build scripts and demo data"""
        return cls(role=UserRole.ADMIN, user_id=None, name='system')
