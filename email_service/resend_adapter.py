"""Resend transactional email adapter."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

import resend

LOGGER = logging.getLogger(__name__)


class ResendMailer:
    """Thin wrapper around the Resend SDK.

    Without an API key the mailer is disabled and callers are expected to skip
    sending.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str],
        sender: str = "onboarding@resend.dev",
        redirect_to: Optional[str] = None,
    ) -> None:
        self.api_key = api_key or None
        self.sender = sender
        self.redirect_to = redirect_to or None

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def resolve_recipients(self, to: Optional[Union[str, List[str]]]) -> List[str]:
        """Return the addresses a message will actually be delivered to."""

        if self.redirect_to:
            return [self.redirect_to]
        if not to:
            return []
        if isinstance(to, str):
            return [to]
        return [address for address in to if address]

    def send(
        self,
        *,
        subject: str,
        html: str,
        to: Optional[Union[str, List[str]]] = None,
    ) -> Dict[str, Any]:
        """Send one HTML email. Blocking; raises on SDK failure."""

        if not self.enabled:
            raise RuntimeError("Resend API key is not configured")

        recipients = self.resolve_recipients(to)
        if not recipients:
            raise ValueError("No recipient address for email")

        # The SDK reads its key from module state.
        resend.api_key = self.api_key
        params = {
            "from": self.sender,
            "to": recipients,
            "subject": subject,
            "html": html,
        }
        LOGGER.info("Sending email via Resend: subject=%r to=%s", subject, recipients)
        response = resend.Emails.send(params)
        LOGGER.debug("Resend response: %s", response)
        return response
