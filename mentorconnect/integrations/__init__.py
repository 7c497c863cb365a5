"""
Clients for the third-party services MentorConnect talks to.

- pusher: Pusher Channels REST client for real-time events
- resend: Resend API client for transactional email
- recaptcha: Google reCAPTCHA verification
"""

from .errors import IntegrationError, MailDeliveryError, RealtimeError, RecaptchaError
from .pusher import PusherClient
from .recaptcha import RecaptchaVerifier
from .resend import Mailer

__all__ = [
    "IntegrationError",
    "MailDeliveryError",
    "Mailer",
    "PusherClient",
    "RealtimeError",
    "RecaptchaError",
    "RecaptchaVerifier",
]
