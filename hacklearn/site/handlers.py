"""Request handling for page views.

Converts router outputs into envelopes for success and error cases. A
missing topic, project or path becomes the "not found" view; any other
failure is reported with its error code.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol, TypedDict

from hacklearn.core.logging_config import get_logger
from hacklearn.exceptions import BaseAPIError, format_error_response, generate_request_id

__all__ = ["process_request"]

_LOGGER = get_logger("site.handlers")


class RouterProtocol(Protocol):
    """Minimal protocol the router must satisfy."""

    def route(self, path: str) -> Dict[str, Any]: ...


class ViewRequest(TypedDict, total=False):
    id: str
    path: str


def _success_envelope(request_id: Optional[str], view: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": request_id,
        "type": "view",
        "ok": True,
        "view": view,
    }


def _error_envelope(request_id: Optional[str], err: Exception) -> Dict[str, Any]:
    formatted = format_error_response(err, request_id=request_id).to_dict()
    error_obj: Dict[str, Any] = {
        "code": formatted["error_code"],
        "message": formatted["message"],
        "status": formatted["http_status"],
    }
    if "user_message" in formatted:
        error_obj["user_message"] = formatted["user_message"]
    if "details" in formatted:
        error_obj["details"] = formatted["details"]

    envelope: Dict[str, Any] = {
        "id": request_id,
        "type": "error",
        "ok": False,
        "error": error_obj,
    }
    if error_obj["status"] == 404:
        envelope["view"] = {
            "page": "not_found",
            "message": error_obj.get("user_message", "Page not found."),
        }
    return envelope


def process_request(router: RouterProtocol, message: Mapping[str, Any]) -> Dict[str, Any]:
    """Process one ``{"id": str, "path": str}`` view request and return an envelope."""
    request_id = message.get("id") or generate_request_id("view")
    path = str(message.get("path") or "/")

    try:
        view = router.route(path)
        return _success_envelope(request_id, view)
    except BaseAPIError as exc:
        log = _LOGGER.info if exc.is_client_error() else _LOGGER.error
        log("View request failed", extra={"path": path, "error_code": exc.error_code})
        return _error_envelope(request_id, exc)
    except Exception as exc:  # Unexpected failures share the error envelope
        _LOGGER.exception("Unexpected error rendering view", extra={"path": path})
        return _error_envelope(request_id, exc)
