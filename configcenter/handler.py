"""HTTP handlers for update checks and id filtering."""

import json
from dataclasses import asdict, dataclass, field, fields

from flask import Flask, jsonify
from flask import request as _http_request


@dataclass(frozen=True)
class CheckUpdateRequest:
    version: str = ""
    platform: str = ""


@dataclass(frozen=True)
class CheckUpdateResponse:
    code: int
    message: str
    full_cdn_url: str
    diff_cdn_url: str


@dataclass(frozen=True)
class FilterIdsRequest:
    version: str = ""
    platform: str = ""
    channel: str = ""
    user_id: str = ""


@dataclass(frozen=True)
class FilterIdsResponse:
    matched_ids_map: dict = field(default_factory=dict)


def check_update(request):
    """Answer an update check."""
    return CheckUpdateResponse(
        code=0,
        message="Success",
        full_cdn_url="https://example.com/full_update.zip",
        diff_cdn_url="https://example.com/diff_update.zip",
    )


def filter_ids(request):
    """Answer an id filter query."""
    return FilterIdsResponse(matched_ids_map={"example_id_1": 1, "example_id_2": 2})


def _bind(cls, body):
    """Decode a JSON body into ``cls``; keys match case-insensitively."""
    payload = json.loads(body)
    if payload is None:
        return cls()
    if not isinstance(payload, dict):
        raise ValueError("request body is not an object")
    names = {f.name.lower(): f.name for f in fields(cls)}
    values = {}
    for key, value in payload.items():
        name = names.get(key.lower())
        if name is None or value is None:
            continue
        if not isinstance(value, str):
            raise ValueError(f"field {key!r} is not a string")
        values[name] = value
    return cls(**values)


def create_app():
    """Build the Flask application serving both endpoints."""
    app = Flask(__name__)

    def serve(request_cls, answer):
        try:
            req = _bind(request_cls, _http_request.get_data())
        except ValueError:
            return jsonify({"error": "Invalid request"}), 400
        return jsonify(asdict(answer(req))), 200

    app.post("/check_update")(lambda: serve(CheckUpdateRequest, check_update))
    app.add_url_rule(
        "/filter_ids", "filter_ids", lambda: serve(FilterIdsRequest, filter_ids), methods=["POST"]
    )
    return app