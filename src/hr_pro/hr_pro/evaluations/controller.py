from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import handles_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.evaluation_service

    @app.route("/api/evaluations", methods=["GET"], endpoint="list_evaluations")
    @handles_errors("Erro ao buscar avaliações")
    def list_evaluations():
        return jsonify(service.list_evaluations())

    @app.route("/api/evaluations/employee/<int:employee_id>", methods=["GET"], endpoint="employee_evaluations")
    @handles_errors("Erro ao buscar avaliações")
    def employee_evaluations(employee_id: int):
        return jsonify(service.list_for_employee(employee_id))

    @app.route("/api/evaluations", methods=["POST"], endpoint="create_evaluation")
    @handles_errors("Erro ao criar avaliação")
    def create_evaluation():
        new_id = service.create(json_body())
        return jsonify({"message": "Avaliação criada com sucesso", "id": new_id}), 201
