"""Seed a few demo travel requests, one per dashboard list."""
from travel_portal import create_app
from travel_portal.services import submit_request
from travel_portal.store import get_store
from travel_portal.workflow import set_status

DEMO_REQUESTS = [
    ({
        "employeeName": "Jane Doe",
        "startDate": "2024-05-01",
        "tripType": "ONE_WAY",
        "fromAirportCode": "JNB",
        "fromAirportName": "OR Tambo International Airport",
        "toAirportCode": "CPT",
        "toAirportName": "Cape Town International Airport",
        "needsFlights": True,
        "notes": "Client meeting",
    }, None),
    ({
        "employeeName": "Sam Ndlovu",
        "startDate": "2024-06-10",
        "endDate": "2024-06-14",
        "tripType": "RETURN",
        "fromAirportCode": "CPT",
        "toAirportCode": "DUR",
        "needsFlights": True,
        "needsAccommodation": True,
        "needsTransport": True,
        "pickupLocation": "Head office",
        "dropoffLocation": "Umhlanga",
        "passengerCount": 2,
    }, "PENDING"),
    ({
        "employeeName": "Lee Botha",
        "startDate": "2024-07-02",
        "tripType": "RETURN",
        "endDate": "2024-07-02",
        "travelMode": "LOCAL",
        "pickupLocation": "Pretoria office",
        "dropoffLocation": "Sandton site",
        "pickupTime": "07:30",
        "returnPickupTime": "17:00",
    }, "APPROVED"),
]

if __name__ == "__main__":
    app = create_app(NOTIFICATIONS_ENABLED=False)
    with app.app_context():
        store = get_store()
        for payload, status in DEMO_REQUESTS:
            record = submit_request(store, payload)
            if status:
                record = set_status(store, record["id"], status)
            print(f"Seeded request #{record['id']} ({record['employee_name']}, {record['status']})")
