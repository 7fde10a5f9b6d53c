"""Notification hook: tells a user about borrow and return events."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class NotificationService(ABC):
    """Delivery channel for user-facing notifications."""

    @abstractmethod
    def send_notification(self, user_id: int, message: str) -> None:
        ...

    @abstractmethod
    def send_notification_with_book(self, user_id: int, message: str, book_id: int) -> None:
        ...


class LoggingNotificationService(NotificationService):
    """Writes notifications to the log instead of delivering them."""

    def send_notification(self, user_id: int, message: str) -> None:
        logger.info(f"[notify user {user_id}] {message}")

    def send_notification_with_book(self, user_id: int, message: str, book_id: int) -> None:
        logger.info(f"[notify user {user_id}] {message} (book {book_id})")
