"""Fake email adapter — keeps outgoing mail in memory."""

from uuid import uuid4

from storefront.notification.channel.email_port import EmailPort, SendResult


class FakeEmailAdapter(EmailPort):
    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.should_raise = False
        self.failure_reason = "Email delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Email delivery failed", should_raise=False):
        """Make subsequent sends fail, either by status or by raising."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.should_raise = should_raise

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> SendResult:
        if self.should_raise:
            raise ConnectionError(self.failure_reason)

        if not self.should_succeed:
            return SendResult.failed(self.failure_reason)

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )
        return SendResult.delivered(message_id)

    def reset(self):
        self.sent_emails.clear()
        self.should_succeed = True
        self.should_raise = False
        self.failure_reason = "Email delivery failed"
