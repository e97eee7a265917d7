# tests/test_exceptions.py
"""
Tests de la conversion erreurs métier -> codes HTTP
Exécuter: pytest tests/test_exceptions.py -v
"""
import pytest

from app.api.deps import status_for, to_http_exception
from app.core.exceptions import (
    AuthenticationError, DashboardError, NotFoundError, PermissionDeniedError,
    PropertyCodeError, StoreError, ValidationFailedError
)


@pytest.mark.parametrize("error, expected", [
    (ValidationFailedError("titre"), 400),
    (AuthenticationError("jeton"), 401),
    (PermissionDeniedError("interdit"), 403),
    (NotFoundError("absent"), 404),
    (StoreError("supabase"), 500),
    (PropertyCodeError("unicité"), 503),
    (DashboardError("inconnue"), 500),
])
def test_status_for(error, expected):
    assert status_for(error) == expected


def test_to_http_exception_keeps_message():
    exc = to_http_exception(NotFoundError("Propriété p1 non trouvée"))
    assert exc.status_code == 404
    assert exc.detail == "Propriété p1 non trouvée"


def test_all_errors_are_dashboard_errors():
    for error_type in (AuthenticationError, NotFoundError, PermissionDeniedError,
                       PropertyCodeError, StoreError, ValidationFailedError):
        assert issubclass(error_type, DashboardError)
