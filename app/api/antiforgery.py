"""Anti-forgery tokens for the upload form."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass

from fastapi import Depends, Form, HTTPException, Request, status
from fastapi.responses import Response

COOKIE_NAME = "gallery_antiforgery"
FORM_FIELD_NAME = "__RequestVerificationToken"


@dataclass(frozen=True, slots=True)
class AntiforgeryTokenSet:
    """Token pair handed to the browser: one cookie, one hidden form field."""

    form_field_name: str
    request_token: str
    cookie_token: str


class Antiforgery:
    """
    Issues and validates double-submit tokens.

    The cookie carries a random nonce; the form field carries its HMAC under a
    server-side secret.
    """

    def __init__(self, secret: str | None = None) -> None:
        self._key = (secret or secrets.token_hex(32)).encode("utf-8")

    def issue(self, cookie_token: str | None = None) -> AntiforgeryTokenSet:
        """Return a token pair, reusing the nonce from an existing cookie."""

        nonce = cookie_token or secrets.token_urlsafe(32)
        return AntiforgeryTokenSet(
            form_field_name=FORM_FIELD_NAME,
            request_token=self._sign(nonce),
            cookie_token=nonce,
        )

    def store(self, response: Response, tokens: AntiforgeryTokenSet) -> None:
        """Attach the cookie half of ``tokens`` to ``response``."""

        response.set_cookie(COOKIE_NAME, tokens.cookie_token, httponly=True, samesite="strict")

    def is_valid(self, cookie_token: str | None, request_token: str | None) -> bool:
        """Return True when the form token matches the cookie nonce."""

        if not cookie_token or not request_token:
            return False
        return hmac.compare_digest(self._sign(cookie_token), request_token)

    def _sign(self, nonce: str) -> str:
        return hmac.new(self._key, nonce.encode("utf-8"), hashlib.sha256).hexdigest()


def require_antiforgery_token(
    request: Request,
    request_token: str | None = Form(default=None, alias=FORM_FIELD_NAME),
) -> None:
    """Reject form posts that do not carry a valid anti-forgery token."""

    antiforgery: Antiforgery = request.app.state.antiforgery
    if not antiforgery.is_valid(request.cookies.get(COOKIE_NAME), request_token):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid anti-forgery token.",
        )


AntiforgeryDependency = Depends(require_antiforgery_token)
