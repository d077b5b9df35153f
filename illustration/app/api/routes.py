"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from illustration.core.annuity_factor import compute_annuity_factor
from illustration.core.errors import DataNotFoundError, InputValidationError
from illustration.core.fia import compute_indexed_projection
from illustration.core.mortality import get_mortality_table
from illustration.core.mva import render_surrender_value_chart
from illustration.core.myga import compute_fixed_projection
from illustration.core.ping import get_ping_message
from illustration.schemas.illustration import (
    AnnuityFactorRequest,
    FixedProjectionRequest,
    IndexedProjectionRequest,
    SurrenderChartRequest,
    SurrenderChartResponse,
)
from illustration.schemas.ping import PingResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning("Rejected %s: %d validation error(s)", request.path, exc.error_count())
    detail = exc.errors(include_url=False, include_context=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InputValidationError)
def _handle_input_error(exc: InputValidationError):
    logger.warning("Rejected %s: %s", request.path, exc)
    return jsonify({"detail": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(DataNotFoundError)
def _handle_missing_data(exc: DataNotFoundError):
    logger.warning("Rejected %s: %s", request.path, exc)
    return jsonify({"detail": str(exc)}), HTTPStatus.NOT_FOUND


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message())
    return jsonify(response.model_dump())


@api_bp.post("/illustration/annuity-factor")
def annuity_factor() -> Any:
    payload = AnnuityFactorRequest.model_validate(_payload())
    table = get_mortality_table(current_app.config["MORTALITY_TABLE_PATH"])
    result = compute_annuity_factor(
        payload.account_values,
        payload.annuitization_rate,
        payload.gender,
        certain_year=payload.certain_year,
        maturity_age=payload.maturity_age,
        table=table,
    )
    return jsonify(result.model_dump())


@api_bp.post("/illustration/fixed")
def fixed_illustration() -> Any:
    """Guaranteed and current MYGA projection tables."""
    payload = FixedProjectionRequest.model_validate(_payload())
    result = compute_fixed_projection(payload.client_data, payload.constants)
    return jsonify(result.model_dump())


@api_bp.post("/illustration/indexed")
def indexed_illustration() -> Any:
    """Ten-year FIA projection across the five allocation buckets."""
    payload = IndexedProjectionRequest.model_validate(_payload())
    result = compute_indexed_projection(payload.client_data, payload.constants)
    return jsonify(result.model_dump())


@api_bp.post("/illustration/surrender-chart")
def surrender_chart() -> Any:
    payload = SurrenderChartRequest.model_validate(_payload())
    svg = render_surrender_value_chart(
        payload.current_surrender_values, payload.term_1, payload.term
    )
    return jsonify(SurrenderChartResponse(svg=svg).model_dump())
