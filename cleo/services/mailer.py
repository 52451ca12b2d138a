"""
Outbound mail over SMTP (aiosmtplib).

Relay credentials are read from the instance information row at send
time, so an admin editing them takes effect on the next message.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage

import aiosmtplib

from cleo.core.config import Settings, settings
from cleo.core.exceptions import DownstreamError
from cleo.models.instance import InstanceInformation

logger = logging.getLogger(__name__)


class Mailer:
    def __init__(self, config: Settings) -> None:
        self.port = config.SMTP_PORT
        self.use_tls = config.SMTP_USE_TLS
        self.timeout = config.SMTP_TIMEOUT_SECONDS

    async def send(
        self,
        info: InstanceInformation,
        to_addr: str,
        subject: str,
        body: str,
    ) -> None:
        message = EmailMessage()
        message["From"] = info.smtp_username
        message["To"] = to_addr
        message["Subject"] = subject
        message.set_content(body)

        try:
            await aiosmtplib.send(
                message,
                hostname=info.smtp_server,
                port=self.port,
                username=info.smtp_username,
                password=info.smtp_pass,
                use_tls=self.use_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery via %s failed", info.smtp_server, exc_info=True)
            raise DownstreamError("Could not send email.") from exc
        logger.info("Mail sent to %s: %s", to_addr, subject)


def verification_link(info: InstanceInformation, email_token: str) -> str:
    return f"{info.hostname.rstrip('/')}/email/{email_token}"


async def send_verification(
    mailer: Mailer,
    info: InstanceInformation,
    to_addr: str,
    email_token: str,
) -> None:
    """Mail the single-use verification link for *email_token*."""
    link = verification_link(info, email_token)
    await mailer.send(
        info,
        to_addr,
        subject=f"Account verification for {info.instance_name}",
        body=f"Please copy and paste this link into your browser: {link}",
    )


def get_mailer() -> Mailer:
    return Mailer(settings)
