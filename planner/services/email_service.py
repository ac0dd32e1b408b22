import asyncio
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr, make_msgid
from typing import Optional
from pydantic import BaseModel, EmailStr
from fastapi import Depends
from planner.core.config import Settings, get_settings
from planner.core.errors import DeliveryFailureError


class MailMessage(BaseModel):
    to_email: EmailStr
    to_name: Optional[str] = None
    subject: str
    html: str


class MailSender:
    """Sends HTML mail over SMTP. Blocking work runs in a worker thread."""

    def __init__(
        self,
        host: str,
        port: int,
        user: str = "",
        password: str = "",
        use_ssl: bool = True,
        sender_name: str = "",
        sender_email: str = "",
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.use_ssl = use_ssl
        self.sender_name = sender_name
        self.sender_email = sender_email

    def build(self, message: MailMessage) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = message.subject
        msg["From"] = formataddr((self.sender_name, self.sender_email))
        msg["To"] = formataddr((message.to_name or "", message.to_email))
        msg["Message-ID"] = make_msgid(domain=self.sender_email.rpartition("@")[2] or None)
        msg.attach(MIMEText(message.html, "html"))
        return msg

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port)
        return smtplib.SMTP(self.host, self.port)

    def send_sync(self, message: MailMessage) -> str:
        """Deliver one message and return its Message-ID."""
        msg = self.build(message)
        try:
            with self._connect() as server:
                if self.user and not self.use_ssl:
                    server.starttls()
                if self.user:
                    server.login(self.user, self.password)
                server.sendmail(self.sender_email, [message.to_email], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise DeliveryFailureError(message.to_email, str(e)) from e
        return msg["Message-ID"]

    async def send(self, message: MailMessage) -> str:
        return await asyncio.to_thread(self.send_sync, message)


def get_mail_sender(app_settings: Settings = Depends(get_settings)) -> MailSender:
    return MailSender(
        host=app_settings.SMTP_HOST,
        port=app_settings.SMTP_PORT,
        user=app_settings.SMTP_USER,
        password=app_settings.SMTP_PASSWORD,
        use_ssl=app_settings.SMTP_USE_SSL,
        sender_name=app_settings.MAIL_FROM_NAME,
        sender_email=app_settings.MAIL_FROM_ADDRESS,
    )
