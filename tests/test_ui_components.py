from rich.console import Console

from cli.ui_components import build_error_panel, error_location
from core.domain.errors import MissingCredentials
from core.domain.models import RequestConfig
from core.services.weather_pipeline import PipelineResult, PipelineStage
from core.validation import validate_config


def _raised() -> MissingCredentials:
    try:
        validate_config(RequestConfig())
    except MissingCredentials as exc:
        return exc
    raise AssertionError("validate_config accepted empty credentials")


def test_error_location_points_at_raise_site():
    location = error_location(_raised())
    assert location is not None
    assert location.split(":")[0].endswith("validation.py")


def test_error_location_without_traceback():
    assert error_location(MissingCredentials("x")) is None


def test_error_panel_mentions_stage_and_kind():
    result = PipelineResult(
        stage=PipelineStage.FAILED,
        failed_at=PipelineStage.INIT,
        error=_raised(),
    )
    console = Console(record=True, width=200)
    console.print(build_error_panel(result))
    text = console.export_text()

    assert "failed after 'init'" in text
    assert "missing_credentials (MissingCredentials)" in text
    assert "validation.py" in text
