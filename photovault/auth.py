"""Ownership gate: resolve a request to an owner identifier.

Nothing here verifies the identifier. The token or field value is trusted
as-is; swap in another ``Authenticator`` to harden it.
"""
import functools
import logging

from flask import g, request

from photovault.errors import MissingOwner, Unauthenticated
from photovault.extensions import get_services

logger = logging.getLogger(__name__)

FORM = "form"
BEARER = "bearer"


class Authenticator:
    def resolve(self, req):
        """Return the owner identifier for ``req`` or raise."""
        raise NotImplementedError


class FormFieldAuthenticator(Authenticator):
    """Owner from a body field (form data, or JSON as a fallback)."""

    def __init__(self, field="email"):
        self.field = field

    def resolve(self, req):
        owner = req.form.get(self.field)
        if owner is None and req.is_json:
            owner = (req.get_json(silent=True) or {}).get(self.field)
        if not isinstance(owner, str) or not owner.strip():
            raise MissingOwner("Email ID is required.")
        return owner.strip()


class BearerTokenAuthenticator(Authenticator):
    """Owner from the second segment of ``Authorization: <scheme> <owner>``."""

    def resolve(self, req):
        parts = req.headers.get("Authorization", "").split()
        if len(parts) < 2:
            logger.info("Rejected request to %s without owner token", req.path)
            raise Unauthenticated("Unauthorized: No email provided.")
        return parts[1]


def require_owner(kind):
    """Resolve the owner with the registered ``kind`` authenticator into ``g.owner``."""

    def decorator(view):
        @functools.wraps(view)
        def wrapped(*args, **kwargs):
            g.owner = get_services().authenticators[kind].resolve(request)
            return view(*args, **kwargs)

        return wrapped

    return decorator
