"""Failure messages for storefront responses seen during load tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

_KIND_BY_STATUS = {
    400: "rejected",
    401: "unauthenticated",
    403: "forbidden",
    404: "not found",
    422: "bad request shape",
    502: "gateway",
}


def _field_messages(error: dict) -> str:
    # {"cart_items": ["Please add cart items ..."], "transaction_id": ["..."]}
    parts = []
    for field, messages in error.items():
        if isinstance(messages, list):
            messages = "; ".join(str(m) for m in messages)
        parts.append(f"{field}: {messages}")
    return " | ".join(parts)


def _pydantic_messages(detail: list) -> str:
    return " | ".join(f"{'.'.join(str(p) for p in err.get('loc', [])[1:])}: {err.get('msg')}" for err in detail)


def extract_error_detail(response: Response) -> str:
    """Summarise a failed storefront response as ``<kind>: <message>``.

    ``kind`` comes from the status code; gateway outages (502) are labelled
    separately from domain rejections so the Locust report tells them apart.
    """
    kind = _KIND_BY_STATUS.get(response.status_code, f"HTTP {response.status_code}")
    try:
        body = response.json()
    except ValueError:
        return f"{kind}: {(response.text or '(empty body)')[:200]}"

    if isinstance(body, dict) and isinstance(body.get("detail"), list):
        return f"{kind}: {_pydantic_messages(body['detail'])}"
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return f"{kind}: {body['detail']}"
    if isinstance(body, dict) and "error" in body:
        error = body["error"]
        return f"{kind}: {_field_messages(error) if isinstance(error, dict) else error}"
    return f"{kind}: {str(body)[:200]}"
