"""Request handling for the calculation endpoint.

Framework-neutral: takes the HTTP method and request body, returns a status
code and a JSON-serializable payload.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from core.engine import CalculationResult, calculate_contributions
from core.exceptions import ContributionCalculatorError
from core.tax_config import IRSLimits

logger = logging.getLogger(__name__)


def error_payload(code: str, message: str) -> dict[str, Any]:
    return {"success": False, "error": {"code": code, "message": message}}


def result_to_json(result: CalculationResult, indent: int | None = 2) -> str:
    """Serialize a result as a JSON document (used for downloads)."""
    return json.dumps(result.to_dict(), indent=indent)


def handle_calculation_request(
    method: str,
    body: str | bytes | dict[str, Any] | None,
    limits: IRSLimits | None = None,
) -> tuple[int, dict[str, Any]]:
    """
    Handle a calculation request.

    Args:
        method: HTTP method; only POST is accepted
        body: Raw JSON text/bytes, or an already-decoded mapping
        limits: IRS limit table override

    Returns:
        (status_code, payload) where payload is ``{"success": True, "data": ...}``
        on success or ``{"success": False, "error": {"code", "message"}}``
    """
    if method.upper() != "POST":
        return 405, error_payload("METHOD_NOT_ALLOWED", "Only POST requests are supported")

    if isinstance(body, (str, bytes)):
        try:
            body = json.loads(body)
        except ValueError as e:
            logger.warning(f"Rejected request with invalid JSON: {e}")
            return 400, error_payload("INVALID_JSON", "Request body must be valid JSON")

    try:
        result = calculate_contributions(body, limits=limits)
    except ContributionCalculatorError as e:
        logger.warning(f"Calculation error [{e.code}]: {e.message}")
        return 400, error_payload(e.code, e.message)
    except Exception as e:
        logger.error(f"Unexpected error handling calculation request: {e}")
        return 500, error_payload(
            "INTERNAL_ERROR", "An unexpected error occurred during calculation"
        )

    return 200, {"success": True, "data": result.to_dict()}
