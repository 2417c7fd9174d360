# -*- coding: utf-8 -*-
import logging
from flask import Blueprint, jsonify, send_file, send_from_directory
from ..utils.errors import StoredFileNotFound
from ..utils.uploads import get_upload_store

logger = logging.getLogger(__name__)

files_bp = Blueprint('files', __name__)


@files_bp.route('/download/<path:filename>', methods=['GET'])
def download_file(filename):
    """Send a stored attachment; only the last path component of the name is used."""
    try:
        name, path = get_upload_store().locate(filename)
    except StoredFileNotFound:
        return jsonify({"error": "File not found"}), 404

    try:
        response = send_file(path, as_attachment=True, download_name=name)
    except OSError as e:
        logger.error(f"Error sending file {name}: {str(e)}")
        return jsonify({"error": "Error downloading file", "details": str(e)}), 500

    logger.info(f"File {name} sent successfully")
    return response


@files_bp.route('/Uploads/<path:filename>', methods=['GET'])
def uploaded_file(filename):
    return send_from_directory(get_upload_store().directory, filename)
