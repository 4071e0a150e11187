import pytest

from core.domain.errors import ConfigError, MissingCredentials
from core.domain.models import RequestConfig
from core.validation import validate_config


@pytest.mark.parametrize(
    "username, password",
    [("", "s3cret"), ("alice", ""), (None, "s3cret"), ("alice", None), (None, None), ("", "")],
)
def test_missing_credentials(username, password):
    config = RequestConfig(username=username, password=password)
    with pytest.raises(MissingCredentials):
        validate_config(config)


def test_credentials_present_is_enough():
    config = RequestConfig(username="alice", password="s3cret", location="", parameters="")
    assert validate_config(config) is None


def test_missing_config():
    with pytest.raises(ConfigError):
        validate_config(None)


def test_password_is_not_in_repr():
    config = RequestConfig(username="alice", password="s3cret")
    assert "s3cret" not in repr(config)
