import smtplib
from email.message import EmailMessage

from immoauto.core.config import get_settings


def send_email(to_email: str, subject: str, body: str) -> dict:
    settings = get_settings()
    if not settings.SMTP_HOST:
        return {"status": "smtp_not_configured"}

    msg = EmailMessage()
    msg["From"] = settings.SMTP_FROM_EMAIL
    msg["To"] = to_email
    msg["Subject"] = subject
    msg.set_content(body)

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=20) as server:
        if settings.SMTP_USE_TLS:
            server.starttls()
        if settings.SMTP_USERNAME and settings.SMTP_PASSWORD:
            server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        server.send_message(msg)
    return {"status": "sent"}
