"""SMTP email adapter — delivers mail through an SMTP relay.

Connection parameters come from the environment:

    SMTP_HOST, SMTP_PORT (587), SMTP_USERNAME, SMTP_PASSWORD,
    SMTP_SENDER, SMTP_TIMEOUT (seconds, 10), SMTP_STARTTLS (true)
"""

import os
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from storefront.notification.channel.email_port import EmailPort, SendResult


class SmtpEmailAdapter(EmailPort):
    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        sender: str = "no-reply@storefront.local",
        timeout: float = 10.0,
        starttls: bool = True,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.timeout = timeout
        self.starttls = starttls

    @classmethod
    def from_env(cls):
        host = os.getenv("SMTP_HOST")
        if not host:
            raise ValueError("SMTP_HOST must be set when EMAIL_BACKEND=smtp")
        return cls(
            host=host,
            port=int(os.getenv("SMTP_PORT", "587")),
            username=os.getenv("SMTP_USERNAME"),
            password=os.getenv("SMTP_PASSWORD"),
            sender=os.getenv("SMTP_SENDER", "no-reply@storefront.local"),
            timeout=float(os.getenv("SMTP_TIMEOUT", "10")),
            starttls=os.getenv("SMTP_STARTTLS", "true").lower() == "true",
        )

    def build_message(self, to, subject, body, html_body=None):
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")
        return message

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> SendResult:
        message = self.build_message(to, subject, body, html_body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
                if self.starttls:
                    client.starttls()
                if self.username:
                    client.login(self.username, self.password or "")
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            return SendResult.failed(str(exc))

        return SendResult.delivered(message["Message-ID"])
