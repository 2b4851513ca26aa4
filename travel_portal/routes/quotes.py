from flask import Blueprint, current_app, send_from_directory

from ..quote_storage import PDF_MIMETYPE
from ..utils.responses import fail

quotes_bp = Blueprint("quotes", __name__)


@quotes_bp.route("/quotes/<path:filename>", methods=["GET"])
def get_quote(filename):
    storage = current_app.extensions["quote_storage"]
    if storage.directory is None:
        return fail("Quote blob storage not configured", 503)

    # send_from_directory rejects paths escaping the directory and 404s on missing files
    response = send_from_directory(
        storage.directory,
        filename,
        mimetype=PDF_MIMETYPE,
        as_attachment=False,
        download_name=filename,
    )
    response.headers["Content-Disposition"] = f'inline; filename="{filename}"'
    return response
