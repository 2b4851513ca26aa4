from datetime import datetime, timezone
from . import db


def _utcnow():
    return datetime.now(timezone.utc)


class TravelRequest(db.Model):
    __tablename__ = "travel_requests"

    id = db.Column(db.Integer, primary_key=True)
    employee_name = db.Column(db.String(200), nullable=False)
    start_date = db.Column(db.String(10), nullable=False)  # YYYY-MM-DD as submitted
    end_date = db.Column(db.String(10))

    trip_type = db.Column(db.String(20), nullable=False, default="ONE_WAY")  # ONE_WAY/RETURN/MULTI_LEG
    from_airport_code = db.Column(db.String(10))
    from_airport_name = db.Column(db.String(200))
    to_airport_code = db.Column(db.String(10))
    to_airport_name = db.Column(db.String(200))

    pickup_location = db.Column(db.String(300))
    dropoff_location = db.Column(db.String(300))
    pickup_time = db.Column(db.String(5))  # HH:MM
    return_pickup_time = db.Column(db.String(5))

    passenger_count = db.Column(db.Integer, nullable=False, default=1)
    needs_flights = db.Column(db.Boolean, nullable=False, default=False)
    needs_accommodation = db.Column(db.Boolean, nullable=False, default=False)
    needs_transport = db.Column(db.Boolean, nullable=False, default=False)

    notes = db.Column(db.Text)
    quote_pdf_url = db.Column(db.Text)  # data URL or blob store URL
    status = db.Column(db.String(30), nullable=False, default="WAITING_FOR_QUOTE")
    created_at = db.Column(db.DateTime, default=_utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "employee_name": self.employee_name,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "trip_type": self.trip_type,
            "from_airport_code": self.from_airport_code,
            "from_airport_name": self.from_airport_name,
            "to_airport_code": self.to_airport_code,
            "to_airport_name": self.to_airport_name,
            "pickup_location": self.pickup_location,
            "dropoff_location": self.dropoff_location,
            "pickup_time": self.pickup_time,
            "return_pickup_time": self.return_pickup_time,
            "passenger_count": self.passenger_count,
            "needs_flights": bool(self.needs_flights),
            "needs_accommodation": bool(self.needs_accommodation),
            "needs_transport": bool(self.needs_transport),
            "notes": self.notes,
            "quote_pdf_url": self.quote_pdf_url,
            "status": self.status,
            "created_at": self.created_at.strftime("%Y-%m-%dT%H:%M:%SZ") if self.created_at else None,
        }
