"""SMTP 发信。对调用方来说是尽力而为：失败只记日志并返回 False。"""
import logging
import smtplib
import ssl
from email.header import Header
from email.mime.text import MIMEText

from app.core.config import settings

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    return bool(
        settings.smtp_host
        and settings.smtp_port
        and settings.smtp_user
        and settings.smtp_password
        and settings.smtp_from
    )


def send_email(to_address: str, subject: str, html_body: str) -> bool:
    """同步发送 HTML 邮件，端口 465 走 SSL，其它端口走 STARTTLS。"""
    if not smtp_configured():
        logger.warning(f"SMTP not configured, skip sending mail to {to_address}")
        return False
    msg = MIMEText(html_body, "html", "utf-8")
    msg["Subject"] = Header(subject, "utf-8")
    msg["From"] = settings.smtp_from
    msg["To"] = to_address
    try:
        if settings.smtp_port == 465:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(
                settings.smtp_host, settings.smtp_port, context=context, timeout=settings.smtp_timeout
            ) as server:
                server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(settings.smtp_from, [to_address], msg.as_string())
        else:
            with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout) as server:
                server.ehlo()
                server.starttls(context=ssl.create_default_context())
                server.login(settings.smtp_user, settings.smtp_password)
                server.sendmail(settings.smtp_from, [to_address], msg.as_string())
        return True
    except (smtplib.SMTPException, OSError) as exc:
        logger.error(f"failed to send mail to {to_address}: {exc}")
        return False
