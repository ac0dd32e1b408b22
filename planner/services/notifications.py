"""
Concurrent mail fan-out with per-recipient outcomes.

``dispatch_all`` starts every send at once and waits for all of them to
settle. A failed send is recorded against its recipient and never cancels the
others; callers get a ``DispatchReport`` instead of an exception.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel

from planner.core.logger import logger as default_logger
from planner.services.email_service import MailMessage, MailSender


class DeliveryResult(BaseModel):
    recipient: str
    message_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DispatchReport(BaseModel):
    results: List[DeliveryResult] = []

    @property
    def sent(self) -> int:
        return sum(1 for result in self.results if result.ok)

    @property
    def failed(self) -> int:
        return len(self.results) - self.sent

    @property
    def failures(self) -> List[DeliveryResult]:
        return [result for result in self.results if not result.ok]


async def dispatch_all(
    sender: MailSender,
    messages: Sequence[MailMessage],
    log: logging.Logger = default_logger,
    label: str = "batch",
) -> DispatchReport:
    outcomes = await asyncio.gather(
        *(sender.send(message) for message in messages),
        return_exceptions=True,
    )

    report = DispatchReport()
    for message, outcome in zip(messages, outcomes):
        if isinstance(outcome, asyncio.CancelledError):
            raise outcome
        if isinstance(outcome, Exception):
            log.error(f"[{label}] delivery to {message.to_email} failed: {outcome}")
            report.results.append(DeliveryResult(recipient=message.to_email, error=str(outcome)))
        else:
            log.debug(f"[{label}] delivered to {message.to_email} as {outcome}")
            report.results.append(DeliveryResult(recipient=message.to_email, message_id=outcome))

    if messages:
        log.info(f"[{label}] {report.sent} sent, {report.failed} failed")
    return report


async def dispatch_one(
    sender: MailSender,
    message: MailMessage,
    log: logging.Logger = default_logger,
    label: str = "single",
) -> DeliveryResult:
    report = await dispatch_all(sender, [message], log=log, label=label)
    return report.results[0]
