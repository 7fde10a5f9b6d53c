"""Services module"""
from .book_service import BookService
from .user_service import UserService
from .notification_service import NotificationService, LoggingNotificationService

__all__ = ["BookService", "UserService", "NotificationService", "LoggingNotificationService"]
