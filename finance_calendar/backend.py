"""REST adapter exposing the accrual engine to forms and calendar views."""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import asdict
from datetime import date
from enum import Enum
from typing import Any, Dict, List

from flask import Flask, jsonify, request

from finance_calendar.config import EngineSettings, configure_logging, settings_from_env
from finance_calendar.data_model import (
    DeductionTableModel,
    IncomeTableModel,
    InvestmentTableModel,
    rows_to_deductions,
    rows_to_incomes,
    rows_to_investments,
)
from finance_calendar.engine.aggregate import aggregate_period
from finance_calendar.engine.daily import month_markers
from finance_calendar.engine.dates import coerce_day
from finance_calendar.engine.projection import ProjectionEngine
from finance_calendar.engine.repository import EventRepository, seed_sample_events
from finance_calendar.exceptions import FinanceCalendarError, InvalidEventDefinition

logger = logging.getLogger(__name__)

INCOME_MODEL = IncomeTableModel()
DEDUCTION_MODEL = DeductionTableModel()
INVESTMENT_MODEL = InvestmentTableModel()

PROJECTION_FREQUENCIES = ("D", "M", "Q", "Y")


def _jsonable(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _jsonable(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def _sanitize_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [_jsonable(row) for row in records]


def _single_definition(parser, payload: dict):
    parsed = parser([payload])
    if not parsed:
        raise InvalidEventDefinition("Name", "is required")
    return parsed[0]


def _query_day(name: str = "date") -> date:
    return coerce_day(request.args.get(name), name)


def create_app(repository: EventRepository | None = None, settings: EngineSettings | None = None) -> Flask:
    settings = settings or EngineSettings()
    if repository is None:
        repository = EventRepository(double_pay_policy=settings.double_pay_policy)
        if settings.seed_sample:
            seed_sample_events(repository)

    app = Flask(__name__)
    engine = ProjectionEngine(repository)
    write_lock = threading.Lock()
    app.config["REPOSITORY"] = repository

    collections = {
        "incomes": (rows_to_incomes, repository.add_income, repository.remove_income),
        "deductions": (rows_to_deductions, repository.add_deduction, repository.remove_deduction),
        "investments": (rows_to_investments, repository.add_investment, repository.remove_investment),
    }

    @app.errorhandler(FinanceCalendarError)
    def handle_engine_error(exc: FinanceCalendarError):
        return jsonify({"error": str(exc), "code": exc.code}), 400

    @app.after_request
    def apply_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET,POST,DELETE,OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    @app.get("/api/health")
    def healthcheck():
        return jsonify({"status": "ok"})

    @app.get("/api/schema")
    def get_schema():
        return jsonify(
            {
                "incomes": INCOME_MODEL.to_payload(),
                "deductions": DEDUCTION_MODEL.to_payload(),
                "investments": INVESTMENT_MODEL.to_payload(),
                "projectionFrequencies": list(PROJECTION_FREQUENCIES),
            }
        )

    @app.get("/api/<kind>")
    def list_events(kind: str):
        if kind not in collections:
            return jsonify({"error": f"Unknown collection: {kind}"}), 404
        items = getattr(repository.snapshot, kind)
        return jsonify({kind: [_jsonable(asdict(item)) for item in items]})

    @app.post("/api/<kind>")
    def add_event(kind: str):
        if kind not in collections:
            return jsonify({"error": f"Unknown collection: {kind}"}), 404
        parser, add, _ = collections[kind]
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "Request body must be a JSON object."}), 400
        definition = _single_definition(parser, payload)
        with write_lock:
            stored = add(definition)
        return jsonify({"message": "Entry added.", "entry": _jsonable(asdict(stored))}), 201

    @app.delete("/api/<kind>/<event_id>")
    def remove_event(kind: str, event_id: str):
        if kind not in collections:
            return jsonify({"error": f"Unknown collection: {kind}"}), 404
        _, _, remove = collections[kind]
        with write_lock:
            removed = remove(event_id)
        entry = None if removed is None else _jsonable(asdict(removed))
        return jsonify({"message": "Entry removed." if removed else "Nothing to remove.", "entry": entry})

    @app.get("/api/summary")
    def get_summary():
        return jsonify(engine.summary(_query_day()).to_dict())

    @app.get("/api/events")
    def get_events():
        day = _query_day()
        return jsonify({"date": day.isoformat(), "events": [event.to_dict() for event in engine.events_on(day)]})

    @app.get("/api/calendar")
    def get_calendar():
        month = request.args.get("month")
        if month:
            anchor = coerce_day(f"{month.strip()}-01", "month")
        else:
            anchor = _query_day()
        markers = month_markers(repository.snapshot, anchor)
        return jsonify({"month": f"{anchor.year:04d}-{anchor.month:02d}", "days": [marker.to_dict() for marker in markers]})

    @app.get("/api/projection")
    def get_projection():
        start = _query_day("start")
        end = _query_day("end")
        freq = str(request.args.get("freq", "M")).upper()
        if freq not in PROJECTION_FREQUENCIES:
            return jsonify({"error": f"Unsupported frequency: {freq}"}), 400
        if freq == "D":
            df = engine.project_range(start, end, freq="D")
        else:
            df = aggregate_period(engine.project_range(start, end, freq="M"), freq=freq)
        return jsonify({"freq": freq, "data": _sanitize_records(df.to_dict(orient="records"))})

    return app


def main() -> None:
    settings = settings_from_env()
    configure_logging(settings.log_level)
    app = create_app(settings=settings)
    logger.info("Serving finance calendar on port %s", settings.port)
    app.run(debug=False, port=settings.port)


if __name__ == "__main__":
    main()
