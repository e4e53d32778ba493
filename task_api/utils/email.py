import html
import logging

import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from task_api.config import settings

logger = logging.getLogger(__name__)

TEST_MODE_MESSAGE_ID = "test-mode-message-id"


def _plural(count: int) -> str:
    return f"{count} task{'s' if count != 1 else ''}"


def _format_deadline(deadline) -> str:
    return deadline.astimezone().strftime("%A, %B %d, %Y %I:%M %p")


def digest_subject(tasks) -> str:
    return f"Reminder: You have {_plural(len(tasks))} due today"


def render_digest_text(username: str, tasks) -> str:
    lines = [
        f"Hello {username},",
        "",
        f"This is a friendly reminder that you have {_plural(len(tasks))} due today:",
        "",
    ]
    for index, task in enumerate(tasks, start=1):
        lines.append(f"{index}. {task.task_title}")
        if task.task_description:
            lines.append(f"   Description: {task.task_description}")
        lines.append(f"   Type: {task.task_type}")
        lines.append(f"   Status: {task.task_status}")
        lines.append(f"   Deadline: {_format_deadline(task.task_deadline)}")
        lines.append("")
    lines += [
        "Don't forget to complete these tasks on time!",
        "",
        "---",
        "This is an automated reminder from your Todo App.",
    ]
    return "\n".join(lines)


def render_digest_html(username: str, tasks) -> str:
    items = []
    for task in tasks:
        description = ""
        if task.task_description:
            description = f"<div><strong>Description:</strong> {html.escape(task.task_description)}</div>"
        items.append(
            '<div style="background:#fff;padding:15px;margin:10px 0;border-left:4px solid #4CAF50;">'
            f"<div style=\"font-weight:bold;font-size:18px;\">{html.escape(task.task_title)}</div>"
            f"{description}"
            f"<div><strong>Type:</strong> {html.escape(task.task_type)}</div>"
            f"<div><strong>Status:</strong> {html.escape(task.task_status)}</div>"
            f"<div><strong>Deadline:</strong> {_format_deadline(task.task_deadline)}</div>"
            "</div>"
        )
    return (
        "<html><body style=\"font-family: Arial, sans-serif; color: #333;\">"
        "<h1>Task Deadline Reminder!</h1>"
        f"<p>Hello {html.escape(username)},</p>"
        f"<p>This is a friendly reminder that you have <strong>{_plural(len(tasks))}</strong> due today:</p>"
        f"{''.join(items)}"
        "<p>Don't forget to complete these tasks on time!</p>"
        "<p style=\"color:#999;font-size:12px;\">This is an automated reminder from your Todo App.</p>"
        "</body></html>"
    )


async def send_email_async(subject: str, text_body: str, to_email: str, html_body: str | None = None):
    """
    Asynchronous email sending function using aiosmtplib.

    Transport errors propagate so callers can record per-recipient failures.
    """
    msg = MIMEMultipart("alternative")
    msg["From"] = f'"{settings.EMAIL_FROM_NAME}" <{settings.EMAIL_FROM or settings.EMAIL_USER}>'
    msg["To"] = to_email
    msg["Subject"] = subject

    msg.attach(MIMEText(text_body, "plain"))
    if html_body:
        msg.attach(MIMEText(html_body, "html"))

    # STARTTLS, common for port 587
    await aiosmtplib.send(
        msg,
        hostname=settings.EMAIL_HOST,
        port=settings.EMAIL_PORT,
        username=settings.EMAIL_USER,
        password=settings.EMAIL_PASS,
        start_tls=True,
        timeout=10
    )
    logger.info("[EMAIL SENT] To %s: %s", to_email, subject)


async def send_digest_email(email: str, username: str, tasks) -> str | None:
    subject = digest_subject(tasks)
    text_body = render_digest_text(username, tasks)

    if settings.EMAIL_TEST_MODE:
        logger.info("[EMAIL TEST MODE] To: %s | Subject: %s\n%s", email, subject, text_body)
        return TEST_MODE_MESSAGE_ID

    if not settings.EMAIL_HOST:
        logger.warning("[EMAIL SKIPPED] SMTP not configured - %s", subject)
        return None

    await send_email_async(subject, text_body, email, render_digest_html(username, tasks))
    return email
