"""Tests for the server-rendered dashboard."""

from unittest.mock import Mock

from travel_portal.utils.airports import AirportDirectory
from tests.conftest import create_request, pdf_upload
from tests.test_airports import RAW


def statuses(client):
    return {r["id"]: r["status"] for r in client.get("/api/requests").get_json()}


class TestNewRequestForm:
    def test_form_renders(self, client):
        response = client.get("/dashboard/")
        assert response.status_code == 200
        assert b"New travel request" in response.data
        assert b'name="employeeName"' in response.data

    def test_form_lists_airports(self, make_app):
        app = make_app()
        session = Mock()
        session.get.return_value.json.return_value = RAW
        app.extensions["airports"] = AirportDirectory("https://example.com/a.json", session=session)

        response = app.test_client().get("/dashboard/")

        assert b'<option value="JNB">' in response.data

    def test_submit_redirects_to_waiting_list(self, client):
        response = client.post("/dashboard/", data={
            "employeeName": "Jane Doe",
            "startDate": "2024-05-01",
            "tripType": "ONE_WAY",
            "travelMode": "FLIGHT",
            "passengerCount": "2",
            "needsFlights": "on",
        }, follow_redirects=True)

        assert response.status_code == 200
        assert response.request.path == "/dashboard/waiting"
        assert b"Jane Doe" in response.data
        assert b"submitted" in response.data

        record = client.get("/api/requests").get_json()[0]
        assert record["needsFlights"] is True
        assert record["needsAccommodation"] is False
        assert record["passengerCount"] == 2
        assert record["endDate"] == "2024-05-01"

    def test_local_travel_drops_flight_fields(self, client):
        client.post("/dashboard/", data={
            "employeeName": "Lee Botha",
            "startDate": "2024-07-02",
            "tripType": "MULTI_LEG",
            "travelMode": "LOCAL",
            "fromAirportCode": "JNB",
            "needsFlights": "on",
            "pickupLocation": "Pretoria office",
            "dropoffLocation": "Sandton site",
            "pickupTime": "07:30",
        })

        record = client.get("/api/requests").get_json()[0]
        assert record["tripType"] == "ONE_WAY"
        assert record["needsFlights"] is False
        assert record["fromAirportCode"] is None
        assert record["pickupTime"] == "07:30"

    def test_submit_failure_shows_error(self, client):
        response = client.post("/dashboard/", data={"employeeName": "", "startDate": ""})
        assert response.status_code == 400
        assert b"Failed to submit travel request" in response.data
        assert client.get("/api/requests").get_json() == []


class TestWorkflowViews:
    def test_quote_then_submit_then_approve(self, client):
        request_id = create_request(client)["id"]

        waiting = client.get("/dashboard/waiting")
        assert f'id="request-{request_id}"'.encode() in waiting.data
        assert b"Submit for approval" not in waiting.data

        client.post(
            f"/dashboard/requests/{request_id}/quote",
            data=pdf_upload(),
            content_type="multipart/form-data",
        )
        waiting = client.get("/dashboard/waiting")
        assert b"View Quote PDF" in waiting.data
        assert b"Submit for approval" in waiting.data

        client.post(f"/dashboard/requests/{request_id}/submit")
        assert statuses(client)[request_id] == "PENDING"
        assert f'id="request-{request_id}"'.encode() in client.get("/dashboard/approvals").data
        assert f'id="request-{request_id}"'.encode() not in client.get("/dashboard/waiting").data

        client.post(f"/dashboard/requests/{request_id}/approve")
        assert statuses(client)[request_id] == "APPROVED"
        assert f'id="request-{request_id}"'.encode() in client.get("/dashboard/tickets").data

    def test_submit_without_quote_is_blocked(self, client):
        request_id = create_request(client)["id"]

        response = client.post(f"/dashboard/requests/{request_id}/submit", follow_redirects=True)

        assert b"Attach a quote PDF before submitting" in response.data
        assert statuses(client)[request_id] == "WAITING_FOR_QUOTE"

    def test_reject(self, client):
        request_id = create_request(client)["id"]
        client.patch(f"/api/requests/{request_id}/status", json={"status": "PENDING"})

        client.post(f"/dashboard/requests/{request_id}/reject")

        assert statuses(client)[request_id] == "REJECTED"
        assert f'id="request-{request_id}"'.encode() not in client.get("/dashboard/approvals").data

    def test_bad_quote_upload_is_flashed(self, client):
        request_id = create_request(client)["id"]

        response = client.post(
            f"/dashboard/requests/{request_id}/quote",
            data=pdf_upload(b"GIF89a", "photo.gif", "image/gif"),
            content_type="multipart/form-data",
            follow_redirects=True,
        )

        assert b"Invalid file. Please upload a PDF file." in response.data
        assert client.get("/api/requests").get_json()[0]["quotePdfUrl"] is None

    def test_unknown_request_is_flashed(self, client):
        response = client.post("/dashboard/requests/999/approve", follow_redirects=True)
        assert response.status_code == 200
        assert b"Not found" in response.data

    def test_empty_list(self, client):
        response = client.get("/dashboard/tickets")
        assert b"No requests here yet." in response.data
