"""Order email port.

Order notifications go through ``EmailPort``; the fake adapter serves
development and tests, the SMTP adapter production. Adapters report delivery
problems in the returned ``SendResult`` and do not raise for them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class DeliveryStatus(Enum):
    SENT = "sent"
    FAILED = "failed"


@dataclass(frozen=True)
class SendResult:
    """Outcome of handing one message to the mail transport."""

    status: DeliveryStatus
    message_id: str | None = None
    error: str | None = None

    @property
    def sent(self) -> bool:
        return self.status == DeliveryStatus.SENT

    @classmethod
    def delivered(cls, message_id: str) -> "SendResult":
        return cls(status=DeliveryStatus.SENT, message_id=message_id)

    @classmethod
    def failed(cls, error: str) -> "SendResult":
        return cls(status=DeliveryStatus.FAILED, error=error)


class EmailPort(ABC):
    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> SendResult:
        """Send one message; ``body`` is plain text, ``html_body`` its HTML alternative."""
        ...
