"""Weather request orchestration.

The pipeline runs one request end to end:

    INIT -> VALIDATED -> URL_BUILT -> REQUESTED -> PARSED -> SANITIZED -> DONE

Any stage failure moves straight to FAILED and skips the remaining stages.
The CLI only decides how to present a `PipelineResult`; every resource
(response buffer, HTTP client) is released here on every path.
"""

from __future__ import annotations

import logging
from contextlib import ExitStack
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

import httpx

from adapters.http_client import build_client, fetch_into
from core.buffer import ResponseBuffer
from core.config import AppSettings
from core.domain.errors import WeatherError
from core.domain.models import RequestConfig
from core.sanitizer import parse_json, strip_sensitive_keys
from core.url_builder import build_url
from core.validation import validate_config

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    INIT = "init"
    VALIDATED = "validated"
    URL_BUILT = "url_built"
    REQUESTED = "requested"
    PARSED = "parsed"
    SANITIZED = "sanitized"
    DONE = "done"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (PipelineStage.DONE, PipelineStage.FAILED)


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, spinners)."""

    stage: Callable[[PipelineStage], None] | None = None


@dataclass
class PipelineResult:
    """Output of a pipeline invocation.

    `document` is only set when the run reached DONE; a failed run never
    exposes partial data.
    """

    stage: PipelineStage = PipelineStage.INIT
    url: str | None = None
    document: Any = None
    bytes_received: int = 0
    failed_at: PipelineStage | None = None
    error: WeatherError | None = None
    history: list[PipelineStage] = field(default_factory=lambda: [PipelineStage.INIT])

    @property
    def ok(self) -> bool:
        return self.stage is PipelineStage.DONE


def run_pipeline(
    *,
    settings: AppSettings,
    request: RequestConfig,
    client: httpx.Client | None = None,
    hooks: PipelineHooks | None = None,
) -> PipelineResult:
    """Validate, build, fetch, parse and sanitize a single request.

    A `client` passed in by the caller is left open; one built here is
    closed before returning.
    """

    hooks = hooks or PipelineHooks()
    result = PipelineResult()

    def advance(stage: PipelineStage) -> None:
        result.stage = stage
        result.history.append(stage)
        logger.debug("pipeline stage -> %s", stage.value)
        if hooks.stage:
            hooks.stage(stage)

    document: Any = None
    try:
        validate_config(request)
        advance(PipelineStage.VALIDATED)

        url = build_url(request, base_url=settings.base_url, max_length=settings.max_url_length)
        result.url = url
        advance(PipelineStage.URL_BUILT)

        with ExitStack() as stack:
            if client is None:
                client = stack.enter_context(build_client(settings))
            buffer = stack.enter_context(
                ResponseBuffer(settings.initial_buffer_size, settings.max_response_size)
            )

            # validate_config guarantees both credentials are set.
            result.bytes_received = fetch_into(
                client,
                url,
                username=request.username or "",
                password=request.password or "",
                sink=buffer,
            )
            advance(PipelineStage.REQUESTED)

            document = parse_json(buffer.data)
            advance(PipelineStage.PARSED)

        document = strip_sensitive_keys(document)
        advance(PipelineStage.SANITIZED)
    except WeatherError as exc:
        logger.debug("pipeline failed after %s: %s", result.stage.value, exc)
        result.failed_at = result.stage
        result.error = exc
        result.document = None
        advance(PipelineStage.FAILED)
        return result

    result.document = document
    advance(PipelineStage.DONE)
    return result
