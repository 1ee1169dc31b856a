import logging
from dataclasses import dataclass
from typing import Optional

import requests

from ruscles.exceptions import AuthenticationRequired

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoogleProfile:
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None


class GoogleAuthService:
    """Verifies Google ID tokens against Google's tokeninfo endpoint"""

    def __init__(self, client_id: Optional[str], tokeninfo_url: str, timeout: int = 10):
        self.client_id = client_id
        self.tokeninfo_url = tokeninfo_url
        self.timeout = timeout

    def verify_id_token(self, id_token: str) -> GoogleProfile:
        if not id_token:
            raise AuthenticationRequired('Missing Google ID token')

        try:
            response = requests.get(self.tokeninfo_url, params={'id_token': id_token}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Google tokeninfo request failed: {e}")
            raise AuthenticationRequired('Unable to verify Google token')

        if response.status_code != 200:
            logger.info(f"Google tokeninfo rejected token (status {response.status_code})")
            raise AuthenticationRequired('Invalid Google token')

        claims = response.json()

        if self.client_id and claims.get('aud') != self.client_id:
            logger.warning("Google token audience does not match the configured client id")
            raise AuthenticationRequired('Invalid Google token')

        # tokeninfo returns booleans as strings
        if str(claims.get('email_verified', '')).lower() != 'true' or not claims.get('email'):
            raise AuthenticationRequired('Google email is not verified')

        return GoogleProfile(
            email=claims['email'],
            name=claims.get('name'),
            picture=claims.get('picture'),
        )
