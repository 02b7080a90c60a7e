"""
Authentication gate for the dashboard.

A single policy decides, per request path, whether to allow the request,
send an anonymous visitor to sign-in, or send a signed-in user away from the
public pages to the dashboard home. Sessions themselves come from
django.contrib.auth.
"""

import logging
from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from django.conf import settings
from django.contrib.auth import authenticate as auth_authenticate, login as auth_login
from django.core.exceptions import PermissionDenied
from django.http import HttpResponseRedirect

from .validation.errors import AuthError

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    REDIRECT_HOME = "redirect_home"


def _protected_prefix() -> str:
    return getattr(settings, "AUTH_GATE_PROTECTED_PREFIX", "/dashboard")


def is_protected(path: str) -> bool:
    prefix = _protected_prefix()
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def authorize(path: str, is_logged_in: bool) -> Decision:
    if is_protected(path):
        return Decision.ALLOW if is_logged_in else Decision.DENY
    if is_logged_in:
        return Decision.REDIRECT_HOME
    return Decision.ALLOW


class DashboardAuthMiddleware:
    """Applies ``authorize`` to every request outside the exempt paths."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path
        exempt = getattr(settings, "AUTH_GATE_EXEMPT_PATHS", [])
        if any(path.startswith(prefix) for prefix in exempt if prefix):
            return self.get_response(request)

        user = getattr(request, "user", None)
        decision = authorize(path, bool(user and user.is_authenticated))

        if decision is Decision.DENY:
            query = urlencode({"next": request.get_full_path()})
            return HttpResponseRedirect(f"{settings.LOGIN_URL}?{query}")
        if decision is Decision.REDIRECT_HOME:
            return HttpResponseRedirect(settings.LOGIN_REDIRECT_URL)
        return self.get_response(request)


def sign_in(request, credentials: Mapping[str, Any]) -> None:
    """Authenticate and attach the session, raising AuthError on refusal."""
    username = (credentials.get("email") or credentials.get("username") or "").strip()
    password = credentials.get("password") or ""

    try:
        user = auth_authenticate(request, username=username, password=password)
    except PermissionDenied as exc:
        raise AuthError(AuthError.ACCESS_DENIED, str(exc)) from exc

    if user is None:
        raise AuthError(AuthError.CREDENTIALS_SIGNIN)
    if not user.is_active:
        raise AuthError(AuthError.ACCESS_DENIED, "Account is inactive")

    auth_login(request, user)


def authenticate(request, prior_state: Optional[str], submission: Mapping[str, Any]) -> Optional[str]:
    """Sign-in action: ``None`` on success, else the message to show.

    Only AuthError is translated. Anything else propagates.
    """
    try:
        sign_in(request, submission)
    except AuthError as error:
        if error.type == AuthError.CREDENTIALS_SIGNIN:
            return "Invalid credentials."
        logger.warning("Sign-in refused: %s", error.type)
        return "Something went wrong."
    return None
