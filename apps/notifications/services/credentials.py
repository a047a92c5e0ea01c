"""
Service-account credentials for FCM.

A short-lived RS256 JWT assertion is signed with the service account's
private key and exchanged at the OAuth2 token endpoint for an access token.
"""
import json
import logging
import time
from dataclasses import dataclass
from typing import Optional

import certifi
import jwt
import requests
from django.conf import settings
from django.core.cache import cache

from apps.common.exceptions import CredentialExchangeError

logger = logging.getLogger('storefront.push')

JWT_BEARER_GRANT = 'urn:ietf:params:oauth:grant-type:jwt-bearer'
ASSERTION_LIFETIME = 3600
# Cached tokens are dropped this many seconds before the provider expires them
EXPIRY_MARGIN = 60


@dataclass(frozen=True)
class ServiceAccount:
    project_id: str
    client_email: str
    private_key: str
    token_uri: str

    @classmethod
    def from_dict(cls, data: dict) -> 'ServiceAccount':
        missing = [key for key in ('client_email', 'private_key') if not data.get(key)]
        if missing:
            raise CredentialExchangeError(f"Service account is missing {', '.join(missing)}")
        return cls(
            project_id=settings.FCM_PROJECT_ID or data.get('project_id', ''),
            client_email=data['client_email'],
            private_key=data['private_key'],
            token_uri=data.get('token_uri') or settings.FCM_TOKEN_URI,
        )


def load_service_account(path: Optional[str] = None) -> ServiceAccount:
    """Read the service-account JSON key file named by FCM_SERVICE_ACCOUNT_FILE"""
    path = path or settings.FCM_SERVICE_ACCOUNT_FILE
    if not path:
        raise CredentialExchangeError("FCM_SERVICE_ACCOUNT_FILE is not configured")
    try:
        with open(path, encoding='utf-8') as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        raise CredentialExchangeError(f"Cannot read service account file: {exc}") from exc
    return ServiceAccount.from_dict(data)


def ssl_verify():
    return certifi.where() if settings.FCM_VERIFY_SSL else False


class FCMCredentialService:
    """Issues OAuth2 access tokens for the FCM HTTP v1 API"""

    def __init__(self, service_account: Optional[ServiceAccount] = None):
        self._service_account = service_account

    @property
    def service_account(self) -> ServiceAccount:
        if self._service_account is None:
            self._service_account = load_service_account()
        return self._service_account

    @property
    def cache_key(self) -> str:
        return f"fcm_access_token_{self.service_account.client_email}"

    def build_assertion(self, now: Optional[int] = None) -> str:
        account = self.service_account
        issued_at = int(now if now is not None else time.time())
        claims = {
            'iss': account.client_email,
            'scope': settings.FCM_SCOPE,
            'aud': account.token_uri,
            'iat': issued_at,
            'exp': issued_at + ASSERTION_LIFETIME,
        }
        try:
            return jwt.encode(claims, account.private_key, algorithm='RS256')
        except (ValueError, TypeError, jwt.PyJWTError) as exc:
            raise CredentialExchangeError(f"Cannot sign service account assertion: {exc}") from exc

    def exchange(self, assertion: str):
        """Trade a signed assertion for (access_token, expires_in)"""
        account = self.service_account
        try:
            response = requests.post(
                account.token_uri,
                data={'grant_type': JWT_BEARER_GRANT, 'assertion': assertion},
                timeout=settings.FCM_TIMEOUT,
                verify=ssl_verify(),
            )
            data = response.json()
        except requests.RequestException as exc:
            raise CredentialExchangeError(f"Token exchange request failed: {exc}") from exc
        except ValueError as exc:
            raise CredentialExchangeError("Token endpoint returned invalid JSON") from exc

        if not response.ok or 'access_token' not in data:
            detail = data.get('error_description') or data.get('error') or response.status_code
            raise CredentialExchangeError(f"Token exchange rejected: {detail}")

        return data['access_token'], int(data.get('expires_in', ASSERTION_LIFETIME))

    def get_access_token(self) -> str:
        use_cache = settings.FCM_CACHE_ACCESS_TOKEN
        if use_cache:
            access_token = cache.get(self.cache_key)
            if access_token:
                return access_token

        access_token, expires_in = self.exchange(self.build_assertion())
        logger.info(f"Obtained FCM access token for {self.service_account.client_email}")

        ttl = min(expires_in, ASSERTION_LIFETIME) - EXPIRY_MARGIN
        if use_cache and ttl > 0:
            cache.set(self.cache_key, access_token, ttl)
        return access_token
