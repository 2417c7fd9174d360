# -*- coding: utf-8 -*-
import logging
from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError
from .. import db
from ..services import request_service
from ..utils.errors import (
    DuplicateRequest, UnsupportedFileType, FileTooLarge, RequestNotFound
)
from ..utils.notifications import emit_request_event, NEW_REQUEST_EVENT, REQUEST_UPDATED_EVENT
from ..utils.uploads import get_upload_store

logger = logging.getLogger(__name__)

requests_bp = Blueprint('requests', __name__)


# ===================== CREATE REQUEST ===================== #
@requests_bp.route('', methods=['POST'])
def create_request():
    # Parsed outside the try so an oversized body reaches the 413 handler
    form = request.form
    document = request.files.get('document')
    try:
        new_request = request_service.create_request(
            form,
            document=document,
            upload_store=get_upload_store()
        )
    except DuplicateRequest as e:
        return jsonify({"error": str(e)}), 400
    except UnsupportedFileType as e:
        return jsonify({"error": str(e)}), 400
    except FileTooLarge as e:
        return jsonify({"error": str(e)}), 413
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error creating request: {str(e)}")
        return jsonify({"error": "Failed to create request", "details": str(e)}), 500

    emit_request_event(NEW_REQUEST_EVENT, new_request)
    return jsonify(new_request.to_dict()), 201


# ===================== LIST REQUESTS ===================== #
@requests_bp.route('', methods=['GET'])
def get_all_requests():
    try:
        requests = request_service.list_requests()
        return jsonify([r.to_dict() for r in requests]), 200
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error fetching requests: {str(e)}")
        return jsonify({"error": "Failed to fetch requests"}), 500


@requests_bp.route('/emp/<emp_id>', methods=['GET'])
def get_requests_by_employee(emp_id):
    try:
        requests = request_service.list_requests_by_employee(emp_id)
        return jsonify([r.to_dict() for r in requests]), 200
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Error fetching requests for employee {emp_id}: {str(e)}")
        return jsonify({"error": "Failed to fetch requests"}), 500


# ===================== UPDATE STATUS ===================== #
@requests_bp.route('/<int:request_id>', methods=['PUT'])
def update_request(request_id):
    data = request.get_json(silent=True) or request.form
    try:
        updated = request_service.update_request_status(request_id, data.get('status'))
    except RequestNotFound:
        logger.warning(f"Request not found: id={request_id}")
        return jsonify({"error": "Request not found"}), 404
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error updating request {request_id}: {str(e)}")
        return jsonify({"error": "Failed to update request"}), 500

    emit_request_event(REQUEST_UPDATED_EVENT, updated)
    return jsonify(updated.to_dict()), 200
