from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ..errors import TravelPortalError
from ..services import attach_quote, submit_request
from ..store import get_store
from ..workflow import TravelRequestStatus, partition_by_status, set_status

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")

FORM_FIELDS = [
    "employeeName", "startDate", "endDate", "tripType", "travelMode",
    "fromAirportCode", "fromAirportName", "toAirportCode", "toAirportName",
    "pickupLocation", "dropoffLocation", "pickupTime", "returnPickupTime",
    "passengerCount", "notes",
]
FLAG_FIELDS = ["needsFlights", "needsAccommodation", "needsTransport"]

# view name -> (status shown, title)
LIST_VIEWS = {
    "waiting": (TravelRequestStatus.WAITING_FOR_QUOTE.value, "Waiting for Acceptance"),
    "approvals": (TravelRequestStatus.PENDING.value, "Pending Approval"),
    "tickets": (TravelRequestStatus.APPROVED.value, "Tickets"),
}

EMPTY_FORM = {"tripType": "ONE_WAY", "travelMode": "FLIGHT", "passengerCount": 1}


def _form_data():
    data = {name: request.form.get(name, "") for name in FORM_FIELDS}
    data.update({name: name in request.form for name in FLAG_FIELDS})

    if data["travelMode"] == "LOCAL":
        # Road travel has no flights, airports or multi-leg itineraries
        data["needsFlights"] = False
        data["needsTransport"] = False
        if data["tripType"] == "MULTI_LEG":
            data["tripType"] = "ONE_WAY"
        for key in ("fromAirportCode", "fromAirportName", "toAirportCode", "toAirportName"):
            data[key] = ""
    else:
        airports = current_app.extensions["airports"]
        for prefix in ("from", "to"):
            code = data[f"{prefix}AirportCode"].strip().upper()
            data[f"{prefix}AirportCode"] = code
            if code and not data[f"{prefix}AirportName"]:
                airport = airports.find(code)
                if airport:
                    data[f"{prefix}AirportName"] = airport.name
    return data


@dashboard_bp.route("/", methods=["GET", "POST"])
def new_request():
    """New travel request form"""
    airports = current_app.extensions["airports"]
    if request.method == "POST":
        data = _form_data()
        try:
            record = submit_request(get_store(), data)
        except TravelPortalError as e:
            flash(f"Failed to submit travel request: {e.message}. Please try again.", "error")
            return render_template("dashboard/new_request.html", form=data, airports=airports.all()), 400

        flash(f"Travel request #{record['id']} submitted. Waiting for a quote.", "success")
        return redirect(url_for("dashboard.request_list", view="waiting"))

    return render_template("dashboard/new_request.html", form=dict(EMPTY_FORM), airports=airports.all())


@dashboard_bp.route("/<any(waiting, approvals, tickets):view>", methods=["GET"])
def request_list(view):
    status, title = LIST_VIEWS[view]
    groups = partition_by_status(get_store().list())
    return render_template(
        "dashboard/request_list.html",
        view=view,
        title=title,
        requests=groups.get(status, []),
    )


@dashboard_bp.route("/requests/<int:request_id>/quote", methods=["POST"])
def upload_quote(request_id):
    file = request.files.get("quote")
    try:
        attach_quote(
            get_store(),
            current_app.extensions["quote_storage"],
            request_id,
            file.read() if file else None,
            file.mimetype if file else None,
            max_bytes=current_app.config.get("QUOTE_MAX_BYTES"),
        )
        flash(f"Quote attached to request #{request_id}.", "success")
    except TravelPortalError as e:
        flash(f"Failed to upload quote: {e.message}", "error")
    return redirect(url_for("dashboard.request_list", view="waiting"))


@dashboard_bp.route("/requests/<int:request_id>/submit", methods=["POST"])
def submit_for_approval(request_id):
    store = get_store()
    try:
        # Only the dashboard insists on a quote; the API lets any status through
        if not store.get(request_id).get("quote_pdf_url"):
            flash("Attach a quote PDF before submitting for approval.", "error")
        else:
            set_status(store, request_id, TravelRequestStatus.PENDING.value)
            flash(f"Request #{request_id} sent for approval.", "success")
    except TravelPortalError as e:
        flash(f"Failed to update status: {e.message}", "error")
    return redirect(url_for("dashboard.request_list", view="waiting"))


def _review(request_id, status):
    try:
        set_status(get_store(), request_id, status)
        flash(f"Request #{request_id} {status.lower()}.", "success")
    except TravelPortalError as e:
        flash(f"Failed to update status: {e.message}", "error")
    return redirect(url_for("dashboard.request_list", view="approvals"))


@dashboard_bp.route("/requests/<int:request_id>/approve", methods=["POST"])
def approve_request(request_id):
    return _review(request_id, TravelRequestStatus.APPROVED.value)


@dashboard_bp.route("/requests/<int:request_id>/reject", methods=["POST"])
def reject_request(request_id):
    return _review(request_id, TravelRequestStatus.REJECTED.value)
