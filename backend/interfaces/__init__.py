from .notification_router import router as notification_router

__all__ = [
    "notification_router",
]
