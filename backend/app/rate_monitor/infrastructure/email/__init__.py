# Email delivery - Resend client and Jinja2 alert templates

from .alert_templates import AlertEmailComposer
from .resend_client import ResendEmailSender

__all__ = [
    "AlertEmailComposer",
    "ResendEmailSender",
]
