import logging
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart

logger = logging.getLogger(__name__)

MAIL_KEYS = ("MAIL_SERVER", "MAIL_PORT", "MAIL_USERNAME", "MAIL_PASSWORD", "MAIL_SENDER")


def mail_settings(config) -> dict:
    """Snapshot of the SMTP settings, safe to hand to a worker thread."""
    return {key: config.get(key) for key in MAIL_KEYS}


def send_html_email(settings: dict, to_email: str, subject: str, html: str) -> bool:
    """
    Sends one HTML email over SMTP with STARTTLS.
    Returns False instead of raising so callers can treat mail as best-effort.
    """
    smtp_server = settings.get("MAIL_SERVER") or "smtp.gmail.com"
    smtp_port = int(settings.get("MAIL_PORT") or 587)
    smtp_user = settings.get("MAIL_USERNAME")
    smtp_pass = settings.get("MAIL_PASSWORD")

    if not smtp_user or not smtp_pass:
        logger.warning("Mail credentials missing (MAIL_USERNAME / MAIL_PASSWORD); skipping email")
        return False

    try:
        msg = MIMEMultipart()
        msg["From"] = settings.get("MAIL_SENDER") or smtp_user
        msg["To"] = to_email
        msg["Subject"] = subject
        msg.attach(MIMEText(html, "html"))

        server = smtplib.SMTP(smtp_server, smtp_port, timeout=50)
        server.ehlo()
        server.starttls()
        server.ehlo()
        server.login(smtp_user, smtp_pass)
        server.send_message(msg)
        server.quit()

        logger.info("Email sent to %s", to_email)
        return True
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Failed to send email to %s: %s", to_email, e)
        return False
