from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..common.datetime_utils import format_minutes, parse_iso_date
from ..core.constants import NO_DATA_MINUTES
from ..core.enums import Direction, PersonCategory, ReportMode, ScoringMode
from ..core.exceptions import PersonNotFoundError, ValidationError
from ..container import Container
from .model import PersonPeriodSummary, RankingEntry

logger = logging.getLogger(__name__)


def summary_to_dict(summary: PersonPeriodSummary) -> dict:
    avg = summary.average_check_in_minutes
    return {
        "identifier": summary.person.identifier,
        "name": summary.person.name,
        "position": summary.person.position,
        "on_time": summary.on_time,
        "stage1_late": summary.stage1_late,
        "stage2_late": summary.stage2_late,
        "present": summary.present,
        "off_site_duty": summary.off_site_duty,
        "official_leave": summary.official_leave,
        "sick": summary.sick,
        "paid_absence": summary.paid_absence,
        "unexplained": summary.unexplained,
        "total_present_days": summary.total_present_days,
        "total_absences": summary.total_absences,
        "attendance_percentage": round(summary.attendance_percentage, 2),
        "average_check_in_minutes": None if avg is None else round(avg, 2),
        "average_check_in": None if avg is None else format_minutes(int(round(avg))),
        "daily": {d.isoformat(): s.value for d, s in sorted(summary.daily_statuses.items())},
    }


def entry_to_dict(entry: RankingEntry) -> dict:
    data = summary_to_dict(entry.summary)
    data.pop("daily")
    data.update(
        rank=entry.rank,
        tier=entry.tier,
        band=entry.band.value,
        composite_score=round(entry.composite_score, 4),
    )
    if data["average_check_in_minutes"] is None:
        data["average_check_in_minutes"] = NO_DATA_MINUTES
    return data


def register(app: Flask, container: Container) -> None:
    service = container.ranking_service

    def _fail(message: str, status: int):
        return jsonify({"success": False, "message": message}), status

    def _period() -> tuple[date, date]:
        today = service.today()
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        start = parse_iso_date(start_s) if start_s else today.replace(day=1)
        end = parse_iso_date(end_s) if end_s else today
        return start, end

    def _category() -> PersonCategory:
        return PersonCategory.parse(request.args.get("category") or PersonCategory.TEACHER.value)

    def _mode() -> ReportMode:
        return ReportMode.parse(request.args.get("mode") or ReportMode.ARRIVAL.value)

    def _position() -> Optional[str]:
        return (request.args.get("position") or "").strip() or None

    @app.errorhandler(PersonNotFoundError)
    def _not_found(e: PersonNotFoundError):
        return _fail(str(e), 404)

    @app.errorhandler(ValidationError)
    def _invalid(e: ValidationError):
        return _fail(str(e), 400)

    @app.errorhandler(ValueError)
    def _bad_param(e: ValueError):
        return _fail(str(e), 400)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return _fail(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return _fail("Internal server error", 500)

    @app.route("/api/ranking", methods=["GET"], endpoint="api_ranking")
    def api_ranking():
        start, end = _period()
        scoring = ScoringMode.parse(request.args.get("scoring") or ScoringMode.MERIT.value)
        result = service.compute_ranking_for(
            _category(), start, end, scoring, position=_position(), mode=_mode()
        )
        entries = result.entries
        limit_s = request.args.get("limit")
        if limit_s:
            try:
                limit = int(limit_s)
            except ValueError:
                raise ValidationError("limit must be a positive integer")
            if limit <= 0:
                raise ValidationError("limit must be a positive integer")
            entries = result.top(limit)
        return jsonify(
            {
                "success": True,
                "start": result.start.isoformat(),
                "end": result.end.isoformat(),
                "scoring": result.scoring.value,
                "mode": result.mode.value,
                "active_school_days": result.active_school_days,
                "entries": [entry_to_dict(e) for e in entries],
            }
        )

    @app.route("/api/recap", methods=["GET"], endpoint="api_recap")
    def api_recap():
        start, end = _period()
        report = service.build_recap(_category(), start, end, position=_position(), mode=_mode())
        return jsonify(
            {
                "success": True,
                "start": report.start.isoformat(),
                "end": report.end.isoformat(),
                "mode": report.mode.value,
                "active_school_days": report.active_school_days,
                "groups": {
                    key: [summary_to_dict(s) for s in summaries] for key, summaries in report.groups.items()
                },
            }
        )

    @app.route("/api/status/<identifier>/<day>", methods=["GET"], endpoint="api_status_get")
    def api_status_get(identifier: str, day: str):
        person = service.get_person(identifier)
        direction = Direction.parse(request.args.get("direction") or Direction.CHECK_IN.value)
        status = service.get_daily_status(person, parse_iso_date(day), direction=direction)
        return jsonify({"success": True, "identifier": identifier, "date": day, "status": status.value})

    @app.route("/api/status/<identifier>/<day>", methods=["PUT"], endpoint="api_status_put")
    def api_status_put(identifier: str, day: str):
        payload = request.get_json(silent=True) or {}
        person = service.get_person(identifier)
        target = parse_iso_date(day)
        direction = Direction.parse(payload.get("direction") or Direction.CHECK_IN.value)
        service.set_manual_status(person, target, payload.get("code"), direction=direction)
        status = service.get_daily_status(person, target, direction=direction)
        return jsonify({"success": True, "identifier": identifier, "date": day, "status": status.value})
