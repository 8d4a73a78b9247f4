from ainft.models.user import User

__all__ = ["User"]
