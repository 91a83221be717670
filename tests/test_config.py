import grpc
import pytest

from core.config import DEFAULT_PORT, Settings
from shared.codes import ErrorCode



@pytest.fixture
def clean_env(monkeypatch):
    for key in ("PORT", "HOST", "GRPC__ENABLED", "GRPC__PORT"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_port_default(clean_env):
    assert Settings(_env_file=None).PORT == DEFAULT_PORT == 3007


def test_port_empty_falls_back_to_default(clean_env):
    clean_env.setenv("PORT", "")
    assert Settings(_env_file=None).PORT == 3007


def test_port_override(clean_env):
    clean_env.setenv("PORT", "8080")
    assert Settings(_env_file=None).PORT == 8080


def test_nested_grpc_settings(clean_env):
    clean_env.setenv("GRPC__ENABLED", "true")
    clean_env.setenv("GRPC__PORT", "6000")
    s = Settings(_env_file=None)
    assert s.grpc.enabled is True
    assert s.grpc.port == 6000


def test_cors_defaults(clean_env):
    cors = Settings(_env_file=None).cors
    assert cors.allow_origin == "*"
    assert cors.allow_methods == ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    assert cors.expose_headers == ["Connect-Protocol-Version"]


@pytest.mark.parametrize(
    "code, http_status, grpc_status",
    [
        (ErrorCode.INTERNAL, 500, grpc.StatusCode.INTERNAL),
        (ErrorCode.INVALID_ARGUMENT, 400, grpc.StatusCode.INVALID_ARGUMENT),
        (ErrorCode.CANCELED, 499, grpc.StatusCode.CANCELLED),
        (ErrorCode.UNAUTHENTICATED, 401, grpc.StatusCode.UNAUTHENTICATED),
        (ErrorCode.UNIMPLEMENTED, 501, grpc.StatusCode.UNIMPLEMENTED),
    ],
)
def test_error_code_mappings(code, http_status, grpc_status):
    assert code.http_status == http_status
    assert code.grpc_status == grpc_status


def test_every_error_code_maps():
    for code in ErrorCode:
        assert 400 <= code.http_status < 600
        assert isinstance(code.grpc_status, grpc.StatusCode)
