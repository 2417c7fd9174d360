# -*- coding: utf-8 -*-
import logging
from app import socketio

logger = logging.getLogger(__name__)

NEW_REQUEST_EVENT = 'new_request'
REQUEST_UPDATED_EVENT = 'request_updated'


def emit_request_event(event_type, employee_request):
    """Broadcast a request change to connected HR dashboards."""
    try:
        socketio.emit(event_type, employee_request.to_dict())
        logger.debug(f"Emitted {event_type} for request {employee_request.id}")
    except Exception as e:
        logger.error(f"Error emitting {event_type} for request {employee_request.id}: {str(e)}")
