from ainft.services.user.handler import UserHandler
from ainft.services.user.service import UserService

__all__ = ["UserHandler", "UserService"]
