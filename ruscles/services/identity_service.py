"""
Identity service for the admin area

This service provides:
- The admin allow-list policy (emails and domains), built once from config
- Email+password and Google sign-in, both normalised to a Principal
- Session token issue and resolution
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from ruscles import db, bcrypt
from ruscles.exceptions import AuthenticationRequired, AccessDenied
from ruscles.models.enums import Role
from ruscles.models.user import User
from ruscles.utils.dates import utcnow
from ruscles.utils.jwt import generate_token, decode_token
from ruscles.utils.text import mask_email, name_from_email

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
INVALID_CREDENTIALS = 'Invalid credentials'


@dataclass(frozen=True)
class Principal:
    id: int
    email: str
    name: Optional[str]
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def to_dict(self):
        return {'id': self.id, 'email': self.email, 'name': self.name, 'role': self.role}

    @classmethod
    def from_user(cls, user: User) -> 'Principal':
        return cls(id=user.id, email=user.email, name=user.name, role=user.role.value)


@dataclass(frozen=True)
class AdminAccessPolicy:
    """Immutable allow-list of admin emails and staff domains."""
    admin_emails: frozenset
    allowed_domains: frozenset
    min_password_length: int = 6

    @classmethod
    def build(cls, admin_emails: Iterable[str] = (), allowed_domains: Iterable[str] = (),
              min_password_length: int = 6) -> 'AdminAccessPolicy':
        return cls(
            admin_emails=frozenset(e.strip().lower() for e in admin_emails if e and e.strip()),
            allowed_domains=frozenset(d.strip().lower().lstrip('@') for d in allowed_domains if d and d.strip()),
            min_password_length=min_password_length,
        )

    @classmethod
    def from_config(cls, config) -> 'AdminAccessPolicy':
        return cls.build(
            config.get('ALLOWED_ADMIN_EMAILS') or (),
            config.get('ALLOWED_ADMIN_DOMAINS') or (),
            config.get('MIN_PASSWORD_LENGTH', 6),
        )

    @staticmethod
    def is_valid_email_format(email: str) -> bool:
        return bool(email) and EMAIL_PATTERN.match(email) is not None

    def is_admin_email(self, email: str) -> bool:
        return (email or '').strip().lower() in self.admin_emails

    def is_allowed_domain(self, email: str) -> bool:
        if not email or '@' not in email:
            return False
        return email.rsplit('@', 1)[1].strip().lower() in self.allowed_domains

    def is_allowed(self, email: str) -> bool:
        return self.is_admin_email(email) or self.is_allowed_domain(email)

    def role_for(self, email: str) -> Role:
        return Role.ADMIN if self.is_admin_email(email) else Role.USER


class IdentityService:
    """Validates sign-in attempts and issues session tokens"""

    def __init__(self, policy: AdminAccessPolicy, google_auth=None, session=None):
        self.policy = policy
        self.google_auth = google_auth
        self._session = session

    @property
    def session(self):
        return self._session or db.session

    def _reject(self, email: str, reason: str):
        logger.warning(f"Credentials sign-in rejected for {mask_email(email)}: {reason}")
        raise AuthenticationRequired(INVALID_CREDENTIALS)

    def sign_in_with_credentials(self, email: str, password: str) -> Principal:
        """
        Email+password sign-in.

        Checks run in order: presence, email format, allow-list, minimum
        password length, stored bcrypt hash (when the user has one), active
        flag. Every failure surfaces as the same "Invalid credentials" error.
        """
        if not isinstance(email or '', str) or not isinstance(password or '', str):
            self._reject(email if isinstance(email, str) else '', 'email and password must be strings')

        email = (email or '').strip().lower()
        password = password or ''

        if not email or not password:
            self._reject(email, 'missing email or password')
        if not self.policy.is_valid_email_format(email):
            self._reject(email, 'malformed email')
        if not self.policy.is_admin_email(email):
            self._reject(email, 'email not on the admin allow-list')
        if len(password) < self.policy.min_password_length:
            self._reject(email, 'password too short')

        user = User.query.filter_by(email=email).first()
        if user is not None and user.password_hash:
            if not bcrypt.check_password_hash(user.password_hash, password):
                self._reject(email, 'password mismatch')
        if user is not None and not user.is_active:
            self._reject(email, 'account deactivated')

        user = self._record_sign_in(email, user)
        logger.info(f"Credentials sign-in for {mask_email(email)} (user {user.id})")
        return Principal.from_user(user)

    def sign_in_with_google(self, profile) -> Principal:
        """Sign in with a verified Google profile (see GoogleAuthService)."""
        email = (profile.email or '').strip().lower()
        if not self.policy.is_valid_email_format(email) or not self.policy.is_allowed(email):
            logger.warning(f"Google sign-in denied for {mask_email(email)}")
            raise AccessDenied('Access denied')

        user = User.query.filter_by(email=email).first()
        if user is not None and not user.is_active:
            logger.warning(f"Google sign-in for deactivated account {mask_email(email)}")
            raise AccessDenied('Access denied')

        user = self._record_sign_in(email, user, name=profile.name, image=profile.picture)
        logger.info(f"Google sign-in for {mask_email(email)} (user {user.id})")
        return Principal.from_user(user)

    def sign_in_with_google_token(self, id_token: str) -> Principal:
        if self.google_auth is None:
            raise AuthenticationRequired('Google sign-in is not configured')
        profile = self.google_auth.verify_id_token(id_token)
        return self.sign_in_with_google(profile)

    def _record_sign_in(self, email: str, user: Optional[User], name: str = None, image: str = None) -> User:
        """Create the user on first sign-in and stamp last_login_at."""
        try:
            if user is None:
                user = User(
                    email=email,
                    name=name or name_from_email(email),
                    image=image,
                    role=self.policy.role_for(email),
                    is_active=True,
                )
                self.session.add(user)
            else:
                # Allow-listed emails are always admins, even if the row predates the list
                if self.policy.is_admin_email(email) and user.role != Role.ADMIN:
                    user.role = Role.ADMIN
                if image and not user.image:
                    user.image = image
            user.last_login_at = utcnow()
            self.session.commit()
            return user
        except Exception:
            self.session.rollback()
            raise

    def issue_token(self, principal: Principal) -> str:
        return generate_token(principal)

    def resolve_token(self, token: str) -> Optional[Principal]:
        """Principal for a session token, or None when invalid or the user is inactive."""
        payload = decode_token(token)
        if payload is None:
            return None

        user = self.session.get(User, payload['id'])
        if user is None or not user.is_active:
            return None
        return Principal.from_user(user)
