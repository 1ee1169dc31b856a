import logging
import jwt
from datetime import datetime, timedelta, timezone
from flask import current_app

logger = logging.getLogger(__name__)


def generate_token(principal):
    payload = {
        'id': principal.id,
        'email': principal.email,
        'name': principal.name,
        'role': principal.role,
        'exp': datetime.now(timezone.utc) + timedelta(days=current_app.config['JWT_EXPIRY_DAYS'])
    }

    return jwt.encode(payload, current_app.config['SECRET_KEY'], algorithm=current_app.config['JWT_ALGORITHM'])


def decode_token(token):
    try:
        payload = jwt.decode(
            token,
            current_app.config['SECRET_KEY'],
            algorithms=[current_app.config['JWT_ALGORITHM']]
        )
        # Ensure the payload has required fields
        if 'id' not in payload or 'role' not in payload:
            logger.warning("Token payload missing id/role claims")
            return None
        return payload
    except jwt.ExpiredSignatureError:
        logger.info("Token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.info(f"Invalid token: {e}")
        return None
