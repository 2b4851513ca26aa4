import uuid
from flask import g, request


def attach_request_id():
    g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())


def get_request_id():
    return getattr(g, "request_id", None)


def echo_request_id(response):
    request_id = get_request_id()
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return response


def register_middlewares(app):
    app.before_request(attach_request_id)
    app.after_request(echo_request_id)
