from typing import Optional

from openinv.models.user import UserInDB
from openinv.stores.base import CollectionStore


class UserStore(CollectionStore[UserInDB]):
    model = UserInDB
    label = "users"

    async def find_by_email(self, email: str) -> Optional[UserInDB]:
        for user in await self.list():
            if user.email.lower() == email.lower():
                return user
        return None
