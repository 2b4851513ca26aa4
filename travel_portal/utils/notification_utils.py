import logging
import threading
from datetime import datetime, timezone
from html import escape

from .email_utils import mail_settings, send_html_email

logger = logging.getLogger(__name__)


def _e(value):
    return escape(str(value)) if value not in (None, "") else ""


def build_request_email(record: dict, travel_mode: str = "FLIGHT"):
    """Returns (subject, html) summarising a newly submitted travel request."""
    is_local = (travel_mode or "FLIGHT").upper() == "LOCAL"
    trip_type = record.get("trip_type")
    passengers = record.get("passenger_count") or 1

    body = f"""
    <h2>New Travel Request Submitted</h2>
    <p><strong>Employee:</strong> {_e(record.get("employee_name"))}</p>
    <p><strong>Request ID:</strong> #{_e(record.get("id"))}</p>
    <p><strong>Status:</strong> {_e(record.get("status"))}</p>
    <hr>
    """

    if is_local:
        dates = _e(record.get("start_date"))
        if trip_type == "RETURN":
            dates += f" to {_e(record.get('end_date'))}"
        body += f"""
    <h3>Local Travel Details</h3>
    <p><strong>Trip Type:</strong> {_e(trip_type)}</p>
    <p><strong>Travel Date:</strong> {dates}</p>
    """
        for key, label in (
            ("pickup_time", "Pickup Time"),
            ("return_pickup_time", "Return Pickup Time"),
            ("pickup_location", "Pickup Location"),
            ("dropoff_location", "Drop-off Location"),
        ):
            if record.get(key):
                body += f"<p><strong>{label}:</strong> {_e(record[key])}</p>\n"
    else:
        dates = _e(record.get("start_date"))
        if trip_type != "ONE_WAY":
            dates += f" to {_e(record.get('end_date'))}"
        body += f"""
    <h3>Flight Details</h3>
    <p><strong>Trip Type:</strong> {_e(trip_type)}</p>
    <p><strong>Travel Dates:</strong> {dates}</p>
    """
        for prefix, label in (("from", "From"), ("to", "To")):
            code = record.get(f"{prefix}_airport_code")
            if code:
                body += (
                    f"<p><strong>{label}:</strong> {_e(code)} - "
                    f"{_e(record.get(f'{prefix}_airport_name'))}</p>\n"
                )
    body += f"<p><strong>Number of Travellers:</strong> {_e(passengers)}</p>\n"

    services = [
        label for key, label in (
            ("needs_flights", "Flights"),
            ("needs_accommodation", "Accommodation"),
            ("needs_transport", "Transport to/from airport"),
        )
        if record.get(key)
    ] or ["None selected"]
    body += "<h3>Services Required</h3>\n<ul>\n"
    body += "".join(f"  <li>{s}</li>\n" for s in services)
    body += "</ul>\n"

    if record.get("notes"):
        body += f"<p><strong>Notes:</strong> {_e(record['notes'])}</p>\n"

    submitted = record.get("created_at") or datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    body += f"<hr>\n<p><em>Submitted at: {_e(submitted)}</em></p>\n"

    if is_local:
        route = "Local Travel"
    else:
        route = f"{record.get('from_airport_code') or ''} → {record.get('to_airport_code') or ''}"
    subject = f"New Travel Request: {record.get('employee_name')} - {route}"
    return subject, body


def _deliver(settings, to_email, subject, html, request_id):
    try:
        if not send_html_email(settings, to_email, subject, html):
            logger.warning("Notification for travel request #%s was not sent", request_id)
    except Exception:
        logger.exception("Failed to send email notification for travel request #%s", request_id)


def notify_new_request(config, record: dict, travel_mode: str = "FLIGHT"):
    """Fire-and-forget email about a new request. Never raises, never blocks.

    Returns the started thread, or None when notifications are off or unconfigured.
    """
    if not config.get("NOTIFICATIONS_ENABLED"):
        return None
    to_email = config.get("NOTIFY_EMAIL_TO")
    if not to_email:
        logger.debug("NOTIFY_EMAIL_TO not set. Skipping new request notification.")
        return None

    try:
        subject, html = build_request_email(record, travel_mode)
        thread = threading.Thread(
            target=_deliver,
            args=(mail_settings(config), to_email, subject, html, record.get("id")),
            daemon=True,
        )
        thread.start()
        return thread
    except Exception:
        logger.exception("Could not schedule notification for travel request #%s", record.get("id"))
        return None
