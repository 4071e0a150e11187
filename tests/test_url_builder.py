import pytest

from core.domain.errors import UrlError, UrlTooLong
from core.domain.models import RequestConfig
from core.url_builder import API_MAX_URL_LENGTH, build_url

DEFAULT_URL = (
    "https://api.meteomatics.com/2024-10-23T00:00:00Z/"
    "t_2m:C,precip_1h:mm,wind_speed_10m:ms/37.7749,-122.4194/json"
)


def test_default_url():
    config = RequestConfig(username="alice", password="s3cret")
    assert build_url(config) == DEFAULT_URL


def test_credentials_never_end_up_in_url():
    url = build_url(RequestConfig(username="alice", password="s3cret"))
    assert "alice" not in url
    assert "s3cret" not in url


def test_custom_segments_and_base_url():
    config = RequestConfig(
        datetime="2025-01-01T00:00:00Z--2025-01-02T00:00:00Z:PT1H",
        parameters="t_2m:C",
        location="47.37,8.54",
        format="csv",
    )
    url = build_url(config, base_url="https://example.test/")
    assert url == "https://example.test/2025-01-01T00:00:00Z--2025-01-02T00:00:00Z:PT1H/t_2m:C/47.37,8.54/csv"


def test_segments_are_not_percent_encoded():
    config = RequestConfig(location="a b/c")
    assert build_url(config).endswith("/a b/c/json")


def test_too_long_fails_instead_of_truncating():
    with pytest.raises(UrlTooLong) as exc_info:
        build_url(RequestConfig(), max_length=10)
    assert exc_info.value.length == len(DEFAULT_URL) + 1
    assert exc_info.value.max_length == 10


def test_limit_counts_the_terminator():
    config = RequestConfig()
    assert build_url(config, max_length=len(DEFAULT_URL) + 1) == DEFAULT_URL
    with pytest.raises(UrlTooLong):
        build_url(config, max_length=len(DEFAULT_URL))


def test_long_field_pushes_past_default_limit():
    config = RequestConfig(parameters="t_2m:C," * 100)
    with pytest.raises(UrlTooLong):
        build_url(config, max_length=API_MAX_URL_LENGTH)


def test_invalid_limit():
    with pytest.raises(UrlError):
        build_url(RequestConfig(), max_length=0)
