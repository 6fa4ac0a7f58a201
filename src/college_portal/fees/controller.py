from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guards import current_session, roles_required
from ..common.http import error_response, server_error
from ..common.validators import require_payload
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    tokens = container.tokens

    @app.route("/api/fee/all", methods=["GET"], endpoint="fee_all")
    @roles_required(tokens, Role.ADMIN)
    def fee_all():
        try:
            fees = container.fee_service.list_all()
            return jsonify({"success": True, "feeRecords": [f.to_dict() for f in fees]})
        except Exception:
            return server_error("Error fetching fee records")

    @app.route("/api/fee/records", methods=["GET"], endpoint="fee_records")
    @roles_required(tokens)
    def fee_records():
        try:
            fees = container.fee_service.list_for(current_session(), request.args.get("studentId"))
            return jsonify({"success": True, "feeRecords": [f.to_dict() for f in fees]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error fetching fee records")

    @app.route("/api/fee/create", methods=["POST"], endpoint="fee_create")
    @roles_required(tokens, Role.ADMIN)
    def fee_create():
        try:
            fee = container.fee_service.create(require_payload(request.get_json(silent=True) or {}))
            return jsonify({"success": True, "fee": fee.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error creating fee record")

    @app.route("/api/fee/update/<int:fee_id>", methods=["PUT"], endpoint="fee_update")
    @roles_required(tokens, Role.ADMIN)
    def fee_update(fee_id: int):
        try:
            fee = container.fee_service.update(fee_id, require_payload(request.get_json(silent=True) or {}))
            return jsonify({"success": True, "fee": fee.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error updating fee record")

    @app.route("/api/fee/delete/<int:fee_id>", methods=["DELETE"], endpoint="fee_delete")
    @roles_required(tokens, Role.ADMIN)
    def fee_delete(fee_id: int):
        try:
            container.fee_service.delete(fee_id)
            return jsonify({"success": True, "message": "Fee record deleted successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("Error deleting fee record")
