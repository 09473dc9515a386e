# Ports for external integrations (RateFeed, EmailSender, AlertComposer)

from .email_sender import AlertComposer, EmailMessage, EmailSender
from .rate_feed import RateFeed

__all__ = [
    "AlertComposer",
    "EmailMessage",
    "EmailSender",
    "RateFeed",
]
