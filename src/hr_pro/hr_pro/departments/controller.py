from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import handles_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.department_service

    @app.route("/api/departments", methods=["GET"], endpoint="list_departments")
    @handles_errors("Erro ao buscar departamentos")
    def list_departments():
        return jsonify(service.list_departments())

    @app.route("/api/departments/<int:dept_id>", methods=["GET"], endpoint="get_department")
    @handles_errors("Erro ao buscar departamento")
    def get_department(dept_id: int):
        return jsonify(service.get_department(dept_id))

    @app.route("/api/departments/<int:dept_id>/employees", methods=["GET"], endpoint="department_employees")
    @handles_errors("Erro ao buscar colaboradores")
    def department_employees(dept_id: int):
        return jsonify(service.list_members(dept_id))

    @app.route("/api/departments/<int:dept_id>/manager", methods=["PUT"], endpoint="set_department_manager")
    @handles_errors("Erro ao atualizar gerente")
    def set_department_manager(dept_id: int):
        department = service.assign_manager(dept_id, json_body())
        return jsonify({"message": "Gerente atualizado com sucesso", "department": department})
