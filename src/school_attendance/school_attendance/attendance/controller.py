from __future__ import annotations

import io
from dataclasses import asdict

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import parse_iso_date, today_iso
from ..common.validators import require_recorded_status
from ..container import Container
from ..core.enums import ReportVariant, SortOrder
from ..core.exceptions import DecodeError, ValidationError
from ..scanning.decoder import decode_image
from .aggregator import summarize
from .history import build_history


def register(app: Flask, container: Container) -> None:
    repo = container.repository

    def _payload() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _date_arg(value: str | None) -> str:
        return parse_iso_date(value).isoformat() if value else today_iso()

    def _not_found(message: str):
        return jsonify({"success": False, "message": message}), 404

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.route(
        "/api/classes/<class_id>/students/<student_id>/attendance",
        methods=["PUT"],
        endpoint="set_attendance",
    )
    def set_attendance(class_id: str, student_id: str):
        data = _payload()
        status = require_recorded_status(str(data.get("status", "")))
        day = _date_arg(data.get("date"))
        if not repo.set_attendance(class_id, student_id, day, status):
            return _not_found("Aluno não encontrado")
        return jsonify({"success": True, "date": day, "status": status.value})

    @app.route("/api/classes/<class_id>/summary", methods=["GET"], endpoint="class_summary")
    def class_summary(class_id: str):
        school_class = repo.get_class(class_id)
        if school_class is None:
            return _not_found("Turma não encontrada")
        day = _date_arg(request.args.get("date"))
        return jsonify({"date": day, **asdict(summarize(school_class.students, day))})

    @app.route("/api/classes/<class_id>/history", methods=["GET"], endpoint="class_history")
    def class_history(class_id: str):
        school_class = repo.get_class(class_id)
        if school_class is None:
            return _not_found("Turma não encontrada")
        history = build_history(school_class.students)
        return jsonify(
            {
                "dates": list(history.dates),
                "rows": [
                    {"id": r.student_id, "name": r.name, "statuses": [s.value for s in r.statuses]}
                    for r in history.rows
                ],
            }
        )

    # ===== CHECK-IN =====

    @app.route("/api/classes/<class_id>/checkin", methods=["POST"], endpoint="checkin")
    def checkin(class_id: str):
        """Check-in with an already decoded QR payload (the raw student id)."""
        data = _payload()
        scanned_id = str(data.get("scanned_id", ""))
        if not scanned_id:
            raise ValidationError("Código QR não pode ser vazio")

        name = repo.check_in_by_scanned_id(class_id, scanned_id, _date_arg(data.get("date")))
        if name is None:
            return _not_found("QR Code não reconhecido")
        return jsonify({"success": True, "student_name": name, "message": f"Presente: {name}"})

    @app.route("/api/classes/<class_id>/checkin/image", methods=["POST"], endpoint="checkin_image")
    def checkin_image(class_id: str):
        """Check-in from an uploaded photo of a QR code."""
        upload = request.files.get("image")
        if upload is None:
            raise ValidationError("Envie uma imagem no campo 'image'")
        try:
            payloads = decode_image(upload.read())
        except DecodeError as e:
            raise ValidationError(str(e)) from e
        if not payloads:
            return _not_found("Nenhum QR Code encontrado na imagem")

        name = repo.check_in_by_scanned_id(class_id, payloads[0], _date_arg(request.form.get("date")))
        if name is None:
            return _not_found("QR Code não reconhecido")
        return jsonify({"success": True, "student_name": name, "message": f"Presente: {name}"})

    # ===== REPORT =====

    @app.route("/api/classes/<class_id>/report.csv", methods=["GET"], endpoint="class_report_csv")
    def class_report_csv(class_id: str):
        school_class = repo.get_class(class_id)
        if school_class is None:
            return _not_found("Turma não encontrada")

        month = request.args.get("month") or today_iso()[:7]
        try:
            variant = ReportVariant(request.args.get("variant", container.report_service.variant.value))
            sort_order = SortOrder(request.args.get("sort", SortOrder.NONE.value))
        except ValueError as e:
            raise ValidationError(str(e)) from e

        owner = repo.find_class_owner(class_id)
        report = container.report_service.build_monthly_report(
            school_class,
            owner.name if owner else None,
            month,
            variant=variant,
            sort_order=sort_order,
        )
        return send_file(
            io.BytesIO(report.to_bytes()),
            mimetype="text/csv",
            as_attachment=True,
            download_name=report.filename,
        )

    # ===== QR CODES =====

    @app.route("/api/classes/<class_id>/qrcodes", methods=["GET"], endpoint="class_qrcodes")
    def class_qrcodes(class_id: str):
        school_class = repo.get_class(class_id)
        if school_class is None:
            return _not_found("Turma não encontrada")
        codes = container.qr_service.render_students(school_class.students)
        return jsonify(
            [
                {"student_id": c.student_id, "name": c.student_name, "filename": c.filename, "ok": c.ok, "error": c.error}
                for c in codes
            ]
        )

    @app.route("/api/classes/<class_id>/students/<student_id>/qr.png", methods=["GET"], endpoint="student_qr_image")
    def student_qr_image(class_id: str, student_id: str):
        school_class = repo.get_class(class_id)
        student = school_class.find_student(student_id) if school_class else None
        if student is None:
            return _not_found("Aluno não encontrado")

        code = container.qr_service.render_student_qr(student)
        if not code.ok:
            return jsonify({"success": False, "message": "Falha ao gerar QR Code"}), 500
        return send_file(
            io.BytesIO(code.png),
            mimetype="image/png",
            as_attachment=request.args.get("download") == "1",
            download_name=code.filename,
        )
