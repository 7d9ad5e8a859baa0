# bank_api/api/middlewares/api_version.py
from functools import wraps
from typing import Any, Callable, TypeVar

from flask import Blueprint, g

from bank_api.config.settings import settings
from bank_api.core.exceptions import NotFoundError, UnsupportedApiVersionError

F = TypeVar("F", bound=Callable[..., Any])


def install_version_guard(bp: Blueprint) -> None:
    """
    Consumes the ``version`` segment of ``/v<int:version>/...`` routes.

    The value is checked against the supported versions and stored in
    ``g.api_version`` so the views do not receive it as an argument.
    """

    @bp.url_value_preprocessor
    def pop_version(endpoint, values):
        if values is None or "version" not in values:
            return
        version = values.pop("version")
        if version not in settings.supported_api_versions:
            raise UnsupportedApiVersionError(version)
        g.api_version = version


def require_api_version(minimum: int) -> Callable[[F], F]:
    """
    Hides a route on versions older than ``minimum``.

    Place it above ``require_auth``: a route that does not exist on the
    requested version is a 404 whatever the credentials.
    """

    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if getattr(g, "api_version", 1) < minimum:
                raise NotFoundError("Resource not found")
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator
