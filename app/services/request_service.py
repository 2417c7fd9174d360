# -*- coding: utf-8 -*-
"""Business operations on employee requests.

Routes call these functions inside an application context; the session is
committed here and rolled back on any store failure before the error is
re-raised to the caller.
"""
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from sqlalchemy.exc import IntegrityError
from .. import db
from ..models.employee_request import (
    EmployeeRequest, ONE_TIME_PROGRAMS, STATUS_PENDING, STATUS_REJECTED
)
from ..utils.errors import DuplicateRequest, RequestNotFound, ValidationFailure

logger = logging.getLogger(__name__)


def _blank_to_none(value):
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _parse_date(value):
    value = _blank_to_none(value)
    if value is None:
        return None  # left to the NOT NULL constraint
    try:
        return datetime.strptime(value.strip(), '%Y-%m-%d').date()
    except ValueError:
        raise ValidationFailure(f"Invalid date: {value}")


def _parse_amount(value):
    value = _blank_to_none(value)
    if value is None:
        return None
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationFailure(f"Invalid amount: {value}")


def find_active_request(emp_id, program):
    """Return the oldest non-rejected request for the employee and program, if any."""
    query = EmployeeRequest.query.filter(
        EmployeeRequest.emp_id == emp_id,
        EmployeeRequest.program == program,
        EmployeeRequest.status != STATUS_REJECTED
    )
    return query.order_by(EmployeeRequest.id.asc()).first()


def create_request(fields, document=None, upload_store=None):
    """Create a Pending request from submitted form fields and an optional attachment.

    The attachment is validated before anything is written; it is stored only once
    the duplicate check has passed, and removed again if the insert fails.
    """
    if upload_store is not None:
        upload_store.validate(document)

    emp_id = _blank_to_none(fields.get('empId'))
    program = _blank_to_none(fields.get('program'))

    if program in ONE_TIME_PROGRAMS:
        existing = find_active_request(emp_id, program)
        if existing:
            logger.warning(f"Duplicate request for {program} by employee {emp_id}")
            raise DuplicateRequest(existing)

    new_request = EmployeeRequest(
        name=_blank_to_none(fields.get('name')),
        email=_blank_to_none(fields.get('email')),
        emp_id=emp_id,
        program=program,
        program_time=_blank_to_none(fields.get('program_time')),
        request_date=_parse_date(fields.get('date')),
        status=STATUS_PENDING,
        loan_type=_blank_to_none(fields.get('loan_type')),
        amount=_parse_amount(fields.get('amount')),
        reason=_blank_to_none(fields.get('reason')),
    )
    new_request.refresh_active_program()

    document_path = upload_store.save(document) if upload_store is not None else None
    new_request.document_path = document_path

    try:
        db.session.add(new_request)
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        if upload_store is not None:
            upload_store.discard(document_path)
        # A concurrent submission may have taken the slot between check and insert
        existing = find_active_request(emp_id, program) if program in ONE_TIME_PROGRAMS else None
        if existing:
            logger.warning(f"Duplicate request for {program} by employee {emp_id}")
            raise DuplicateRequest(existing)
        raise ValidationFailure(str(e.orig))
    except Exception:
        db.session.rollback()
        if upload_store is not None:
            upload_store.discard(document_path)
        raise

    logger.info(f"Created request {new_request.id} for employee {emp_id} ({program})")
    return new_request


def list_requests():
    return EmployeeRequest.query.order_by(
        EmployeeRequest.request_date.desc(),
        EmployeeRequest.id.desc()
    ).all()


def list_requests_by_employee(emp_id):
    return EmployeeRequest.query.filter_by(emp_id=emp_id).order_by(
        EmployeeRequest.request_date.desc(),
        EmployeeRequest.id.desc()
    ).all()


def update_request_status(request_id, status):
    """Overwrite the status of a request. Any transition is allowed.

    Rejecting a one-time program request releases its slot; other transitions
    leave the slot column untouched so an update can never collide with it.
    """
    employee_request = db.session.get(EmployeeRequest, request_id)
    if not employee_request:
        raise RequestNotFound(request_id)

    employee_request.status = status
    if status == STATUS_REJECTED:
        employee_request.active_program = None

    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise ValidationFailure(str(e.orig))
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Request {request_id} status set to {status}")
    return employee_request
