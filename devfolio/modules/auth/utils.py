from datetime import datetime, timedelta, timezone
from functools import wraps
import requests
from joserfc import jwt
from joserfc.errors import JoseError
from joserfc.jwk import KeySet, OctKey
from flask import g, jsonify, request
from devfolio.core import get_config_value, AuthError, logger
from .database import UserDatabase

GOOGLE_CERTS_URL = 'https://www.googleapis.com/oauth2/v3/certs'
GOOGLE_ISSUERS = ['accounts.google.com', 'https://accounts.google.com']

# Pin algorithms so a token cannot pick its own
GOOGLE_ALGORITHMS = ['RS256']
SESSION_ALGORITHMS = ['HS256']


class GoogleTokenVerifier:
    """Verifies Google Sign-In ID tokens against Google's published signing keys"""

    # Cache for Google's JWKS to avoid fetching it on every sign-in
    _key_set = None
    _cache_expiry = None
    _CACHE_DURATION_HOURS = 1

    @classmethod
    def get_key_set(cls):
        now = datetime.now()
        if cls._key_set is not None and cls._cache_expiry and cls._cache_expiry > now:
            return cls._key_set

        response = requests.get(GOOGLE_CERTS_URL, timeout=5)
        response.raise_for_status()
        cls._key_set = KeySet.import_key_set(response.json())
        cls._cache_expiry = now + timedelta(hours=cls._CACHE_DURATION_HOURS)
        return cls._key_set

    @classmethod
    def verify(cls, id_token):
        """
        Verify a Google ID token and return its claims.

        Raises:
            AuthError: signature, issuer, audience or expiry check failed.
        """
        client_id = get_config_value('GOOGLE_CLIENT_ID')
        if not client_id:
            raise AuthError('Google sign-in is not configured')

        registry = jwt.JWTClaimsRegistry(
            leeway=60,
            iss={'essential': True, 'values': GOOGLE_ISSUERS},
            aud={'essential': True, 'value': client_id},
            exp={'essential': True},
            email={'essential': True},
        )
        try:
            token = jwt.decode(id_token, cls.get_key_set(), algorithms=GOOGLE_ALGORITHMS)
            registry.validate(token.claims)
        except (JoseError, ValueError, requests.RequestException) as e:
            raise AuthError(f"Google token verification failed: {e}")
        return dict(token.claims)


def verify_google_token(id_token):
    """
    Exchange a Google ID token for the local admin user.
    Returns None when the token is invalid or the email is not allow-listed.
    """
    try:
        claims = GoogleTokenVerifier.verify(id_token)
    except AuthError as e:
        logger.log_security_event('Google token rejected', {'reason': e.message})
        return None

    email = claims.get('email')
    allowed_email = get_config_value('ALLOWED_EMAIL')
    if not allowed_email or email != allowed_email:
        logger.log_security_event('Sign-in attempt from non allow-listed email', {'email': email})
        return None

    return UserDatabase.upsert_google_user(
        email=email,
        name=claims.get('name'),
        google_id=claims.get('sub'),
        avatar=claims.get('picture'),
    )


def session_key():
    return OctKey.import_key(get_config_value('SESSION_SECRET'))


def generate_token(user):
    """Issue the bearer token used by the admin dashboard"""
    now = datetime.now(timezone.utc)
    expiry_days = int(get_config_value('TOKEN_EXPIRY_DAYS', 7))
    payload = {
        'userId': user.id,
        'iat': int(now.timestamp()),
        'exp': int((now + timedelta(days=expiry_days)).timestamp()),
    }
    return jwt.encode({'alg': 'HS256'}, payload, session_key(), algorithms=SESSION_ALGORITHMS)


def decode_token(token):
    """Return the user id carried by a bearer token, or raise AuthError"""
    try:
        claims = jwt.decode(token, session_key(), algorithms=SESSION_ALGORITHMS).claims
        jwt.JWTClaimsRegistry(exp={'essential': True}).validate(claims)
    except (JoseError, ValueError):
        raise AuthError('Invalid token')

    user_id = claims.get('userId')
    if not user_id:
        raise AuthError('Invalid token')
    return user_id


def require_auth(f):
    """Decorator to require a valid bearer token; sets g.current_user"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization', '')
        if not auth_header.startswith('Bearer '):
            return jsonify({'error': 'No token provided'}), 401

        try:
            user_id = decode_token(auth_header.split(' ', 1)[1].strip())
        except AuthError as e:
            return jsonify(e.to_dict()), e.status_code

        user = UserDatabase.get_allowed_user(user_id)
        if not user:
            return jsonify({'error': 'User not found'}), 401

        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function
