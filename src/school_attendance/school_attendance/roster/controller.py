from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..storage.codec import school_to_dict
from .importer import decode_roster_bytes


def register(app: Flask, container: Container) -> None:
    repo = container.repository

    def _payload() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _rejected(message: str, code: int = 400):
        return jsonify({"success": False, "message": message}), code

    @app.route("/api/state", methods=["GET"], endpoint="state")
    def state():
        return jsonify(repo.to_dict())

    # ===== SCHOOLS =====

    @app.route("/api/schools", methods=["POST"], endpoint="add_school")
    def add_school():
        school = repo.add_school(_payload().get("name", ""))
        if school is None:
            return _rejected("Nome da escola não pode ser vazio")
        return jsonify({"success": True, "school": school_to_dict(school)}), 201

    @app.route("/api/schools/<school_id>", methods=["DELETE"], endpoint="delete_school")
    def delete_school(school_id: str):
        if not repo.delete_school(school_id):
            return _rejected("Escola não encontrada", 404)
        return jsonify({"success": True, "active_school_id": repo.active_school_id})

    @app.route("/api/schools/<school_id>/select", methods=["POST"], endpoint="select_school")
    def select_school(school_id: str):
        if not repo.set_active_school(school_id):
            return _rejected("Escola não encontrada", 404)
        return jsonify({"success": True, "active_school_id": repo.active_school_id, "active_class_id": repo.active_class_id})

    # ===== CLASSES =====

    @app.route("/api/schools/<school_id>/classes", methods=["POST"], endpoint="add_class")
    def add_class(school_id: str):
        if repo.get_school(school_id) is None:
            return _rejected("Escola não encontrada", 404)
        school_class = repo.add_class(school_id, _payload().get("name", ""))
        if school_class is None:
            return _rejected("Nome da turma não pode ser vazio")
        return jsonify({"success": True, "class": {"id": school_class.id, "name": school_class.name}}), 201

    @app.route("/api/classes/<class_id>", methods=["DELETE"], endpoint="delete_class")
    def delete_class(class_id: str):
        if not repo.delete_class(class_id):
            return _rejected("Turma não encontrada", 404)
        return jsonify({"success": True, "active_class_id": repo.active_class_id})

    @app.route("/api/classes/<class_id>/select", methods=["POST"], endpoint="select_class")
    def select_class(class_id: str):
        if not repo.set_active_class(class_id):
            return _rejected("Turma não encontrada", 404)
        return jsonify({"success": True, "active_school_id": repo.active_school_id, "active_class_id": repo.active_class_id})

    # ===== STUDENTS =====

    @app.route("/api/classes/<class_id>/students", methods=["POST"], endpoint="add_student")
    def add_student(class_id: str):
        if repo.get_class(class_id) is None:
            return _rejected("Turma não encontrada", 404)
        student = repo.add_student(class_id, _payload().get("name", ""))
        if student is None:
            return _rejected("Nome do aluno não pode ser vazio")
        return jsonify({"success": True, "student": {"id": student.id, "name": student.name}}), 201

    @app.route("/api/classes/<class_id>/students/import", methods=["POST"], endpoint="import_students")
    def import_students(class_id: str):
        """Roster import: an uploaded file ("file") or a JSON body {"text": ...}."""
        if repo.get_class(class_id) is None:
            return _rejected("Turma não encontrada", 404)

        upload = request.files.get("file")
        text = decode_roster_bytes(upload.read()) if upload else str(_payload().get("text", ""))

        created = repo.bulk_add_students(class_id, text)
        return jsonify({"success": True, "created": [{"id": s.id, "name": s.name} for s in created]}), 201

    @app.route("/api/classes/<class_id>/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    def delete_student(class_id: str, student_id: str):
        if not repo.delete_student(class_id, student_id):
            return _rejected("Aluno não encontrado", 404)
        return jsonify({"success": True})

    @app.route("/api/classes/<class_id>/students", methods=["DELETE"], endpoint="clear_students")
    def clear_students(class_id: str):
        if not repo.clear_students(class_id):
            return _rejected("Turma não encontrada", 404)
        return jsonify({"success": True})
