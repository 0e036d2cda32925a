from contextlib import contextmanager
import logging
from models import db
from app.auth.policy import AccessDenied
from app.services import ServiceError

@contextmanager
def transactional(message="DB transaction failed"):
    """Context manager to wrap a database transaction."""
    try:
        yield
        db.session.commit()
    except (AccessDenied, ServiceError):
        # Expected refusals; reported by the error handlers.
        db.session.rollback()
        raise
    except Exception as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise
