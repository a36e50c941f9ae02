"""Outbound mail over SMTP.

Sending never raises for delivery problems; callers get a ``MailResult`` and
decide what to report.
"""
from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass, field
from email.message import EmailMessage
from email.utils import make_msgid, parseaddr
from typing import Any, Dict, Optional

from flask import render_template

logger = logging.getLogger(__name__)

CONTACT_SUBJECT = "Thank you for contacting MediClarity"


@dataclass(frozen=True)
class MailMessage:
    sender: str
    to: str
    subject: str
    html_body: str


@dataclass
class MailResult:
    ok: bool
    info: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


class Mailer:
    def __init__(self, host: str, port: int, user: str, password: str, timeout: float = 30):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "Mailer":
        return cls(
            host=config.get("MAIL_SMTP_HOST") or "smtp.gmail.com",
            port=int(config.get("MAIL_SMTP_PORT") or 465),
            user=config.get("GMAIL_USER") or "",
            password=config.get("GMAIL_PASS") or "",
        )

    @property
    def ready(self) -> bool:
        return bool(self.user and self.password)

    def _build(self, message: MailMessage) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = message.sender
        msg["To"] = message.to
        msg["Subject"] = message.subject
        msg["Message-ID"] = make_msgid()
        msg.set_content("This message requires an HTML-capable mail client.")
        msg.add_alternative(message.html_body, subtype="html")
        return msg

    def send(self, message: MailMessage) -> MailResult:
        if not self.ready:
            return MailResult(ok=False, error="Mail credentials are not configured")

        msg = self._build(message)
        envelope_from = parseaddr(message.sender)[1] or self.user
        recipient = parseaddr(message.to)[1]
        delivered = False
        code, reply = 0, b""
        try:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.login(self.user, self.password)
                code, reply = smtp.mail(envelope_from)
                if code != 250:
                    raise smtplib.SMTPSenderRefused(code, reply, envelope_from)
                rcode, rreply = smtp.rcpt(recipient)
                if rcode not in (250, 251):
                    raise smtplib.SMTPRecipientsRefused({recipient: (rcode, rreply)})
                # data() raises SMTPDataError unless the server queues the message
                code, reply = smtp.data(msg.as_bytes(policy=msg.policy.clone(linesep="\r\n")))
                delivered = True
        except (smtplib.SMTPException, OSError) as e:
            if not delivered:
                logger.warning("Mail to %s failed: %s", recipient, e)
                return MailResult(ok=False, error=str(e))
            logger.warning("Mail to %s queued, but closing the connection failed: %s", recipient, e)

        info = {
            "accepted": [recipient],
            "rejected": [],
            "envelope": {"from": envelope_from, "to": [recipient]},
            "messageId": msg["Message-ID"],
            "response": f"{code} {reply.decode(errors='replace') if isinstance(reply, bytes) else reply}",
        }
        return MailResult(ok=True, info=info)


def build_contact_acknowledgement(name: str, email: str, sender_name: str, sender_address: str) -> MailMessage:
    """Render the thank-you mail sent back to someone who used the contact form.

    Must be called inside an application context.
    """
    html = render_template("email/contact_acknowledgement.html", name=name, subject=CONTACT_SUBJECT)
    return MailMessage(
        sender=f"{sender_name} <{sender_address}>",
        to=email,
        subject=CONTACT_SUBJECT,
        html_body=html,
    )
