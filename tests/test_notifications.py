"""Tests for the best-effort new request email."""

import smtplib
from unittest.mock import patch

from travel_portal.utils.email_utils import send_html_email
from travel_portal.utils.notification_utils import (
    _deliver,
    build_request_email,
    notify_new_request,
)

RECORD = {
    "id": 12,
    "employee_name": "Jane Doe",
    "status": "WAITING_FOR_QUOTE",
    "trip_type": "RETURN",
    "start_date": "2024-05-01",
    "end_date": "2024-05-07",
    "from_airport_code": "JNB",
    "from_airport_name": "OR Tambo International Airport",
    "to_airport_code": "CPT",
    "to_airport_name": "Cape Town International Airport",
    "passenger_count": 2,
    "needs_flights": True,
    "needs_accommodation": True,
    "needs_transport": False,
    "notes": "Client <workshop>",
    "created_at": "2024-04-20T09:00:00Z",
}

SMTP_CONFIG = {
    "NOTIFICATIONS_ENABLED": True,
    "NOTIFY_EMAIL_TO": "travel@example.com",
    "MAIL_SERVER": "smtp.example.com",
    "MAIL_PORT": 587,
    "MAIL_USERNAME": "bot@example.com",
    "MAIL_PASSWORD": "secret",
    "MAIL_SENDER": "Travel Request Portal <noreply@example.com>",
}


class TestBuildRequestEmail:
    def test_flight_request(self):
        subject, html = build_request_email(RECORD, "FLIGHT")

        assert subject == "New Travel Request: Jane Doe - JNB → CPT"
        assert "Flight Details" in html
        assert "2024-05-01 to 2024-05-07" in html
        assert "JNB - OR Tambo International Airport" in html
        assert "<li>Flights</li>" in html
        assert "<li>Accommodation</li>" in html
        assert "Transport to/from airport" not in html
        assert "Client &lt;workshop&gt;" in html
        assert "Submitted at: 2024-04-20T09:00:00Z" in html

    def test_local_request(self):
        record = dict(
            RECORD,
            trip_type="ONE_WAY",
            needs_flights=False,
            needs_accommodation=False,
            pickup_location="Head office",
            pickup_time="07:30",
        )
        subject, html = build_request_email(record, "LOCAL")

        assert subject == "New Travel Request: Jane Doe - Local Travel"
        assert "Local Travel Details" in html
        assert "Pickup Location:</strong> Head office" in html
        assert "Pickup Time:</strong> 07:30" in html
        assert "None selected" in html
        assert " to 2024-05-07" not in html


class TestNotifyNewRequest:
    def test_disabled(self):
        assert notify_new_request(dict(SMTP_CONFIG, NOTIFICATIONS_ENABLED=False), RECORD) is None

    def test_no_recipient(self):
        assert notify_new_request(dict(SMTP_CONFIG, NOTIFY_EMAIL_TO=None), RECORD) is None

    def test_sends_on_background_thread(self):
        with patch("travel_portal.utils.notification_utils.send_html_email", return_value=True) as send:
            thread = notify_new_request(SMTP_CONFIG, RECORD)
            thread.join(timeout=5)

        assert thread.daemon
        send.assert_called_once()
        settings, to_email, subject, html = send.call_args[0]
        assert to_email == "travel@example.com"
        assert settings["MAIL_USERNAME"] == "bot@example.com"
        assert subject.startswith("New Travel Request: Jane Doe")

    def test_delivery_failure_is_swallowed(self):
        with patch(
            "travel_portal.utils.notification_utils.send_html_email",
            side_effect=RuntimeError("resend down"),
        ):
            _deliver({}, "travel@example.com", "s", "<p>h</p>", 12)

    def test_create_succeeds_when_mail_fails(self, make_app):
        app = make_app(**SMTP_CONFIG)
        client = app.test_client()
        with patch(
            "travel_portal.utils.notification_utils.send_html_email",
            side_effect=RuntimeError("smtp down"),
        ), patch("travel_portal.utils.notification_utils.threading.Thread") as thread_cls:
            response = client.post(
                "/api/requests", json={"employeeName": "Jane Doe", "startDate": "2024-05-01"}
            )
            # Run the background task inline so the failure happens inside the test
            target = thread_cls.call_args.kwargs["target"]
            target(*thread_cls.call_args.kwargs["args"])

        assert response.status_code == 201
        thread_cls.return_value.start.assert_called_once()


class TestSendHtmlEmail:
    def test_missing_credentials(self):
        with patch("travel_portal.utils.email_utils.smtplib.SMTP") as smtp:
            assert send_html_email({}, "a@example.com", "s", "<p>h</p>") is False
        smtp.assert_not_called()

    def test_sends_message(self):
        with patch("travel_portal.utils.email_utils.smtplib.SMTP") as smtp:
            assert send_html_email(SMTP_CONFIG, "a@example.com", "Subject", "<p>h</p>") is True

        smtp.assert_called_once_with("smtp.example.com", 587, timeout=50)
        server = smtp.return_value
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("bot@example.com", "secret")
        message = server.send_message.call_args[0][0]
        assert message["To"] == "a@example.com"
        assert message["From"] == "Travel Request Portal <noreply@example.com>"

    def test_smtp_error_returns_false(self):
        with patch("travel_portal.utils.email_utils.smtplib.SMTP") as smtp:
            smtp.return_value.login.side_effect = smtplib.SMTPAuthenticationError(535, b"bad creds")
            assert send_html_email(SMTP_CONFIG, "a@example.com", "s", "<p>h</p>") is False
