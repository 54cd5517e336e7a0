from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import handles_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.training_service

    @app.route("/api/trainings", methods=["GET"], endpoint="list_trainings")
    @handles_errors("Erro ao buscar formações")
    def list_trainings():
        return jsonify(service.list_trainings())

    @app.route("/api/trainings/<int:training_id>", methods=["GET"], endpoint="get_training")
    @handles_errors("Erro ao buscar formação")
    def get_training(training_id: int):
        return jsonify(service.get_training(training_id))

    @app.route("/api/trainings/<int:training_id>/enroll", methods=["POST"], endpoint="enroll_employee")
    @handles_errors("Erro ao inscrever colaborador")
    def enroll_employee(training_id: int):
        service.enroll(training_id, json_body().get("employeeId"))
        return jsonify({"message": "Colaborador inscrito com sucesso"})

    @app.route(
        "/api/trainings/<int:training_id>/enroll/<int:employee_id>",
        methods=["DELETE"],
        endpoint="unenroll_employee",
    )
    @handles_errors("Erro ao cancelar inscrição")
    def unenroll_employee(training_id: int, employee_id: int):
        service.unenroll(training_id, employee_id)
        return jsonify({"message": "Inscrição cancelada com sucesso"})
