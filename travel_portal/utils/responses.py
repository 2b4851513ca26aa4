from flask import jsonify


def ok(data=None, code=200):
    return jsonify(data), code


def fail(message="Bad Request", code=400, errors=None, **extra):
    payload = {"error": message}
    if errors is not None:
        payload["errors"] = errors
    payload.update(extra)
    return jsonify(payload), code
