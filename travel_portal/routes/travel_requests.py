from flask import Blueprint, current_app, request

from ..errors import ValidationError
from ..services import attach_quote, submit_request
from ..store import get_store
from ..utils.case import camelize_keys
from ..utils.responses import ok
from ..workflow import set_status

travel_requests_bp = Blueprint("travel_requests", __name__)


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON in request body")
    return data


@travel_requests_bp.route("/health", methods=["GET"])
def health():
    return ok({"ok": True})


@travel_requests_bp.route("/requests", methods=["GET"])
def list_requests():
    return ok([camelize_keys(r) for r in get_store().list()])


@travel_requests_bp.route("/requests", methods=["POST"])
def create_request():
    record = submit_request(get_store(), _json_body())
    return ok(camelize_keys(record), 201)


@travel_requests_bp.route("/requests/<int:request_id>/quote", methods=["POST"])
def upload_quote(request_id):
    file = request.files.get("quote")
    record = attach_quote(
        get_store(),
        current_app.extensions["quote_storage"],
        request_id,
        file.read() if file else None,
        file.mimetype if file else None,
        max_bytes=current_app.config.get("QUOTE_MAX_BYTES"),
    )
    return ok(camelize_keys(record))


@travel_requests_bp.route("/requests/<int:request_id>/status", methods=["PATCH"])
def update_status(request_id):
    data = _json_body()
    record = set_status(get_store(), request_id, data.get("status"))
    return ok(camelize_keys(record))


@travel_requests_bp.route("/airports", methods=["GET"])
def search_airports():
    airports = current_app.extensions["airports"].search(request.args.get("q", ""))
    return ok([a.to_dict() for a in airports])
