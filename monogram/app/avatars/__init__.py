from .controller import create_avatars_router
from .service import AvatarsService

__all__ = ["create_avatars_router", "AvatarsService"]
