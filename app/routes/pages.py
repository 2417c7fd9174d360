# -*- coding: utf-8 -*-
from flask import Blueprint, current_app, send_from_directory

pages_bp = Blueprint('pages', __name__)


@pages_bp.route('/', methods=['GET'])
def employee_page():
    return send_from_directory(current_app.config['FRONTEND_FOLDER'], 'index.html')


@pages_bp.route('/hr', methods=['GET'])
def hr_page():
    return send_from_directory(current_app.config['HR_FOLDER'], 'index.html')


@pages_bp.route('/<path:filename>', methods=['GET'])
def public_asset(filename):
    return send_from_directory(current_app.config['PUBLIC_FOLDER'], filename)
