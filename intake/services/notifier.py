# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: best-effort email notifications.

``EmailNotifier.send`` reports delivery as a bool and never raises; the
``NotificationDispatcher`` runs one or more sends on a worker pool and stops
waiting after a shared deadline, counting unfinished sends as failed.
"""
import smtplib
import time
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import date, datetime, timezone
from email.message import EmailMessage
from email.utils import formataddr
from html import escape
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from intake.core.logging import get_logger
from intake.metrics import NOTIFICATIONS_SENT, NOTIFICATION_LATENCY

logger = get_logger(__name__)

CONTACT_ADMIN = "contact_admin"
DEMO_CONFIRMATION = "demo_confirmation"
DEMO_ADMIN = "demo_admin"


class Notifier(Protocol):
    def send(self, kind: str, payload: Dict[str, Any]) -> bool: ...


def _field(value: Any, fallback: str = "Not provided") -> str:
    return escape(str(value)) if value else fallback


def _pretty_date(value: Optional[str]) -> str:
    try:
        return date.fromisoformat(value).strftime("%B %d, %Y")
    except (TypeError, ValueError):
        return _field(value, "Not specified")


def _stamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _contact_admin(p: Dict[str, Any], company: str) -> Tuple[str, str]:
    subject = f"New Contact Form Submission: {p.get('subject') or p.get('name')}"
    html = f"""
    <h2>New Contact Form Submission</h2>
    <p><strong>Name:</strong> {_field(p.get('name'))}</p>
    <p><strong>Email:</strong> {_field(p.get('email'))}</p>
    <p><strong>Phone:</strong> {_field(p.get('phone'))}</p>
    <p><strong>Company:</strong> {_field(p.get('company'))}</p>
    <p><strong>Service:</strong> {_field(p.get('service'), 'Not specified')}</p>
    <p><strong>Subject:</strong> {_field(p.get('subject'), 'No subject')}</p>
    <p><strong>Message:</strong></p>
    <p>{_field(p.get('message'))}</p>
    <hr>
    <p><em>Submitted on: {_stamp()}</em></p>
    """
    return subject, html


def _demo_confirmation(p: Dict[str, Any], company: str) -> Tuple[str, str]:
    subject = f"Demo Booking Confirmation - {company}"
    html = f"""
    <h2>Demo Booking Confirmation</h2>
    <p>Dear {_field(p.get('name'), 'customer')},</p>
    <p>Thank you for booking a demo with {escape(company)}!</p>
    <p><strong>Booking Details:</strong></p>
    <ul>
      <li><strong>Service:</strong> {_field(p.get('service'))}</li>
      <li><strong>Date:</strong> {_pretty_date(p.get('preferred_date'))}</li>
      <li><strong>Time:</strong> {_field(p.get('preferred_time'))}</li>
    </ul>
    <p>We will contact you shortly to confirm the details and schedule your demo.</p>
    <p>Best regards,<br>Team {escape(company)}</p>
    """
    return subject, html


def _demo_admin(p: Dict[str, Any], company: str) -> Tuple[str, str]:
    subject = f"New Demo Booking: {p.get('service')}"
    html = f"""
    <h2>New Demo Booking</h2>
    <p><strong>Name:</strong> {_field(p.get('name'))}</p>
    <p><strong>Email:</strong> {_field(p.get('email'))}</p>
    <p><strong>Phone:</strong> {_field(p.get('phone'))}</p>
    <p><strong>Company:</strong> {_field(p.get('company'))}</p>
    <p><strong>Service:</strong> {_field(p.get('service'))}</p>
    <p><strong>Preferred Date:</strong> {_pretty_date(p.get('preferred_date'))}</p>
    <p><strong>Preferred Time:</strong> {_field(p.get('preferred_time'))}</p>
    <p><strong>Budget:</strong> {_field(p.get('budget'), 'Not specified')}</p>
    <p><strong>Timeline:</strong> {_field(p.get('timeline'), 'Not specified')}</p>
    <p><strong>Project Description:</strong></p>
    <p>{_field(p.get('project_description'))}</p>
    <hr>
    <p><em>Booked on: {_stamp()}</em></p>
    """
    return subject, html


# kind -> (template, recipient is the requester rather than staff)
TEMPLATES: Dict[str, Tuple[Callable[[Dict[str, Any], str], Tuple[str, str]], bool]] = {
    CONTACT_ADMIN: (_contact_admin, False),
    DEMO_CONFIRMATION: (_demo_confirmation, True),
    DEMO_ADMIN: (_demo_admin, False),
}


class EmailNotifier:
    """SMTP sender. Failures are logged and reported as ``False``, never raised."""

    def __init__(self, settings):
        self._settings = settings

    def compose(self, kind: str, payload: Dict[str, Any]) -> EmailMessage:
        template, to_requester = TEMPLATES[kind]
        subject, html = template(payload, self._settings.COMPANY_NAME)
        recipient = payload.get("email") if to_requester else self._settings.ADMIN_EMAIL
        if not recipient:
            raise ValueError(f"No recipient for {kind} email")

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = formataddr((self._settings.COMPANY_NAME, self._settings.EMAIL_FROM))
        message["To"] = recipient
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(html, subtype="html")
        return message

    def send(self, kind: str, payload: Dict[str, Any]) -> bool:
        s = self._settings
        if not (s.SMTP_HOST and s.EMAIL_FROM):
            logger.warning("SMTP not configured; %s email not sent", kind)
            NOTIFICATIONS_SENT.labels(kind=kind, outcome="skipped").inc()
            return False

        start = time.perf_counter()
        try:
            message = self.compose(kind, payload)
            with smtplib.SMTP(s.SMTP_HOST, s.SMTP_PORT, timeout=s.NOTIFICATION_TIMEOUT) as server:
                if s.SMTP_USE_TLS:
                    server.starttls()
                if s.SMTP_USER and s.SMTP_PASS:
                    server.login(s.SMTP_USER, s.SMTP_PASS)
                server.send_message(message)
        except Exception as exc:
            NOTIFICATIONS_SENT.labels(kind=kind, outcome="failed").inc()
            logger.warning("Email delivery failed kind=%s: %s", kind, exc)
            return False
        finally:
            NOTIFICATION_LATENCY.labels(kind=kind).observe(time.perf_counter() - start)

        NOTIFICATIONS_SENT.labels(kind=kind, outcome="sent").inc()
        logger.info("Email sent kind=%s to=%s", kind, message["To"])
        return True


class NotificationDispatcher:
    """Runs independent sends in parallel, bounded by one overall timeout."""

    def __init__(self, notifier: Notifier, timeout: float = 5.0, max_workers: int = 4):
        self._notifier = notifier
        self._timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notify")

    def send(self, kind: str, payload: Dict[str, Any]) -> bool:
        return self.send_all([(kind, payload)])[0]

    def send_all(self, jobs: Sequence[Tuple[str, Dict[str, Any]]]) -> List[bool]:
        """One result per job, in job order. Sends still running at the deadline count as ``False``."""
        futures = [self._executor.submit(self._attempt, kind, payload) for kind, payload in jobs]
        done, _ = wait(futures, timeout=self._timeout)
        results: List[bool] = []
        for (kind, _), future in zip(jobs, futures):
            if future in done:
                results.append(future.result())
            else:
                future.cancel()
                NOTIFICATIONS_SENT.labels(kind=kind, outcome="timeout").inc()
                logger.warning("Notification %s still pending after %.1fs; reported as failed",
                               kind, self._timeout)
                results.append(False)
        return results

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _attempt(self, kind: str, payload: Dict[str, Any]) -> bool:
        try:
            return bool(self._notifier.send(kind, payload))
        except Exception as exc:
            NOTIFICATIONS_SENT.labels(kind=kind, outcome="failed").inc()
            logger.warning("Notifier raised for %s: %s", kind, exc)
            return False
