from __future__ import annotations

import io
import logging
import re
from typing import Optional

from flask import Flask, jsonify, request, send_file

from ..container import Container
from ..core.constants import EXPORT_FILENAME, XLSX_MIMETYPE
from ..core.exceptions import ConflictError, DomainError, NotFoundError, RenderError, ValidationError
from .payload import ReportRequest

logger = logging.getLogger(__name__)

_REPORT_ID_RE = re.compile(r"[+-]?[0-9]+")

# Identifiers are 64-bit signed integers
REPORT_ID_MIN = -(2**63)
REPORT_ID_MAX = 2**63 - 1


def parse_report_id(raw: str) -> Optional[int]:
    """Parse a path identifier; ``None`` when it is not a plain decimal integer."""
    if not raw or not _REPORT_ID_RE.fullmatch(raw):
        return None
    value = int(raw)
    if not REPORT_ID_MIN <= value <= REPORT_ID_MAX:
        return None
    return value


def register(app: Flask, container: Container) -> None:
    service = container.report_service
    exporter = container.report_exporter

    def _invalid_id():
        return jsonify({"error": "Invalid report ID"}), 400

    def _invalid_body():
        return jsonify({"error": "Invalid request body"}), 400

    @app.route("/reports", methods=["POST"], endpoint="create_report")
    def create_report():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return _invalid_body()
        try:
            req = ReportRequest.from_payload(payload)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        try:
            service.create(req)
        except ConflictError as e:
            return jsonify({"error": str(e)}), 409
        except DomainError as e:
            return jsonify({"error": "Failed to create report", "details": str(e)}), 500
        except Exception as e:
            logger.exception("Unexpected error while creating report")
            return jsonify({"error": "Failed to create report", "details": str(e)}), 500

        return jsonify({"message": "Report created successfully"}), 200

    @app.route("/reports", methods=["GET"], endpoint="list_reports")
    def list_reports():
        try:
            reports = service.find_all()
        except DomainError as e:
            return jsonify({"error": "Failed to fetch reports", "details": str(e)}), 500
        except Exception as e:
            logger.exception("Unexpected error while listing reports")
            return jsonify({"error": "Failed to fetch reports", "details": str(e)}), 500

        return jsonify({"reports": reports}), 200

    @app.route("/reports/<report_id>", methods=["GET"], endpoint="get_report")
    def get_report(report_id: str):
        rid = parse_report_id(report_id)
        if rid is None:
            return _invalid_id()

        try:
            report = service.find_by_id(rid)
        except NotFoundError as e:
            return jsonify({"error": "Report not found", "details": str(e)}), 404
        except DomainError as e:
            return jsonify({"error": "Failed to fetch report", "details": str(e)}), 500
        except Exception as e:
            logger.exception("Unexpected error while fetching report %s", rid)
            return jsonify({"error": "Failed to fetch report", "details": str(e)}), 500

        return jsonify({"report": report}), 200

    @app.route("/reports/<report_id>", methods=["PUT"], endpoint="update_report")
    def update_report(report_id: str):
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return _invalid_body()

        rid = parse_report_id(report_id)
        if rid is None:
            return _invalid_id()

        try:
            req = ReportRequest.from_payload(payload)
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

        try:
            service.update(rid, req)
        except ConflictError as e:
            return jsonify({"error": str(e)}), 409
        except DomainError as e:
            # NotFoundError included: update surfaces it as an internal error
            return jsonify({"error": "Failed to update report", "details": str(e)}), 500
        except Exception as e:
            logger.exception("Unexpected error while updating report %s", rid)
            return jsonify({"error": "Failed to update report", "details": str(e)}), 500

        return jsonify({"message": "Report updated successfully"}), 200

    @app.route("/reports/<report_id>", methods=["DELETE"], endpoint="delete_report")
    def delete_report(report_id: str):
        rid = parse_report_id(report_id)
        if rid is None:
            return _invalid_id()

        try:
            service.delete(rid)
        except DomainError as e:
            return jsonify({"error": "Failed to delete report", "details": str(e)}), 500
        except Exception as e:
            logger.exception("Unexpected error while deleting report %s", rid)
            return jsonify({"error": "Failed to delete report", "details": str(e)}), 500

        return jsonify({"message": "Report deleted successfully"}), 200

    @app.route("/reports/<report_id>/export", methods=["GET"], endpoint="export_report")
    def export_report(report_id: str):
        rid = parse_report_id(report_id)
        if rid is None:
            return _invalid_id()

        try:
            report = service.find_by_id(rid)
        except DomainError as e:
            return jsonify({"error": str(e)}), 500
        except Exception as e:
            logger.exception("Unexpected error while loading report %s for export", rid)
            return jsonify({"error": str(e)}), 500

        try:
            data = exporter.render(report)
        except RenderError as e:
            logger.error("Export of report %s failed: %s", rid, e)
            return jsonify({"error": "Failed to write Excel file", "details": str(e)}), 500

        return send_file(
            io.BytesIO(data),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=EXPORT_FILENAME,
        )
