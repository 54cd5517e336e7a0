from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import handles_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @handles_errors("Erro ao buscar colaboradores")
    def list_employees():
        return jsonify(service.list_employees())

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @handles_errors("Erro ao buscar colaborador")
    def get_employee(employee_id: int):
        return jsonify(service.get_detail(employee_id))

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @handles_errors("Erro ao criar colaborador")
    def create_employee():
        new_id = service.create(json_body())
        return jsonify({"message": "Colaborador criado com sucesso", "id": new_id}), 201

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    @handles_errors("Erro ao atualizar colaborador")
    def update_employee(employee_id: int):
        service.update(employee_id, json_body())
        return jsonify({"message": "Colaborador atualizado com sucesso", "id": employee_id})

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @handles_errors("Erro ao eliminar colaborador")
    def delete_employee(employee_id: int):
        service.delete(employee_id)
        return jsonify({"message": "Colaborador eliminado com sucesso"})
