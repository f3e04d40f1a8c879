import json
import logging

from flask import has_request_context, request
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.audit_log import AuditLog

logger = logging.getLogger(__name__)

def log_event(action: str, actor_email=None, entity=None, entity_id=None, metadata=None):
    """Record an audit row in its own commit. Call only after the business transaction has ended."""
    ip = user_agent = None
    if has_request_context():
        ip = request.headers.get("X-Forwarded-For", request.remote_addr)
        user_agent = request.headers.get("User-Agent", "")

    row = AuditLog(
        action=action,
        entity=entity,
        entity_id=str(entity_id) if entity_id is not None else None,
        actor_email=actor_email,
        ip=ip,
        user_agent=user_agent[:255] if user_agent else None,
        metadata_json=json.dumps(metadata) if metadata else None
    )
    db.session.add(row)
    try:
        db.session.commit()
    except SQLAlchemyError:
        # the booking outcome is already final; losing an audit row must not change the response
        db.session.rollback()
        logger.exception("Failed to write audit event %s", action)
