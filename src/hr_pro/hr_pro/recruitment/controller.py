from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import handles_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.recruitment_service

    @app.route("/api/recruitment/jobs", methods=["GET"], endpoint="list_jobs")
    @handles_errors("Erro ao buscar vagas")
    def list_jobs():
        return jsonify(service.list_jobs())

    @app.route("/api/recruitment/jobs/<int:job_id>", methods=["GET"], endpoint="get_job")
    @handles_errors("Erro ao buscar vaga")
    def get_job(job_id: int):
        return jsonify(service.get_job(job_id))

    @app.route("/api/recruitment/jobs/<int:job_id>/close", methods=["PUT"], endpoint="close_job")
    @handles_errors("Erro ao fechar vaga")
    def close_job(job_id: int):
        return jsonify({"message": "Vaga fechada com sucesso", "job": service.close_job(job_id)})

    @app.route("/api/recruitment/candidates", methods=["GET"], endpoint="list_candidates")
    @handles_errors("Erro ao buscar candidatos")
    def list_candidates():
        return jsonify(service.list_candidates(request.args.get("jobId")))

    @app.route("/api/recruitment/jobs/<int:job_id>/candidates", methods=["GET"], endpoint="job_candidates")
    @handles_errors("Erro ao buscar candidatos")
    def job_candidates(job_id: int):
        return jsonify(service.list_job_candidates(job_id))

    @app.route(
        "/api/recruitment/candidates/<int:candidate_id>/status",
        methods=["PUT"],
        endpoint="update_candidate_status",
    )
    @handles_errors("Erro ao atualizar status")
    def update_candidate_status(candidate_id: int):
        service.update_candidate_status(candidate_id, json_body())
        return jsonify({"message": "Status atualizado com sucesso"})

    @app.route(
        "/api/recruitment/candidates/<int:candidate_id>/recruiter",
        methods=["PUT"],
        endpoint="update_candidate_recruiter",
    )
    @handles_errors("Erro ao atualizar recrutador")
    def update_candidate_recruiter(candidate_id: int):
        service.assign_recruiter(candidate_id, json_body())
        return jsonify({"message": "Recrutador atualizado com sucesso"})
