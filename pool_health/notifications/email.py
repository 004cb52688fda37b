"""Email notification service."""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from ..config import EmailConfig

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "🚨 Pool Health Alert"


class EmailNotifier:
    """Email CRITICAL pool alerts and daily reports via SMTP."""

    def __init__(self, config: EmailConfig) -> None:
        self.alert_email = config.alert_email
        self.smtp_server = config.smtp_server
        self.smtp_port = config.smtp_port
        self.sender_email = config.sender_email
        self.sender_password = config.sender_password

    async def send_alert(self, message: str, subject: str = "") -> bool:
        if not self.alert_email:
            logger.debug("No alert email configured, skipping email")
            return False

        if not self.sender_email or not self.sender_password:
            logger.warning("Email credentials not configured")
            return False

        msg = MIMEMultipart()
        msg["From"] = self.sender_email
        msg["To"] = self.alert_email
        msg["Subject"] = subject or DEFAULT_SUBJECT
        msg.attach(MIMEText(message, "plain"))

        try:
            server = smtplib.SMTP(self.smtp_server, self.smtp_port)
            try:
                server.starttls()
                server.login(self.sender_email, self.sender_password)
                server.send_message(msg)
            finally:
                server.quit()
            logger.info("Pool alert email sent to %s", self.alert_email)
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email: %s", e)
            return False

    async def send_summary(self, message: str, silent: bool = True) -> bool:
        """Per-cycle check summaries are not emailed."""
        return False
