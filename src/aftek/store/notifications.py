"""User-visible cart notifications.

When a request is available, notifications become Django messages (shown
as toasts by the storefront). Without one they are only logged.
"""

import logging

from django.contrib import messages

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    messages.DEBUG: logging.DEBUG,
    messages.INFO: logging.INFO,
    messages.SUCCESS: logging.INFO,
    messages.WARNING: logging.WARNING,
    messages.ERROR: logging.ERROR,
}


class Notifier:
    """Logs notifications; subclasses also deliver them to the user."""

    def notify(self, level: int, message: str):
        logger.log(_LOG_LEVELS.get(level, logging.INFO), "Cart notification: %s", message)

    def success(self, message: str):
        self.notify(messages.SUCCESS, message)

    def info(self, message: str):
        self.notify(messages.INFO, message)

    def warning(self, message: str):
        self.notify(messages.WARNING, message)

    def error(self, message: str):
        self.notify(messages.ERROR, message)


class RequestNotifier(Notifier):
    """Queue notifications on the request with the messages framework."""

    def __init__(self, request):
        self.request = request

    def notify(self, level, message):
        super().notify(level, message)
        messages.add_message(self.request, level, message, fail_silently=True)
