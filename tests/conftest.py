"""Shared test fixtures."""

from __future__ import annotations

import io
from typing import Any

import pytest

from core.config import AppSettings
from core.domain.models import RequestDescriptor


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        url="http://vr.test/api",
        api_key="test-key",
        version_date="2015-12-02",
    )


@pytest.fixture
def stream() -> io.BytesIO:
    return io.BytesIO(b"\x89PNG fake image bytes")


def make_stream(payload: bytes = b"PK zip bytes") -> io.BytesIO:
    return io.BytesIO(payload)


class RecordingDispatcher:
    """Dispatcher stub that records descriptors and answers with a fixed result."""

    def __init__(self, result: Any = None, error: BaseException | None = None) -> None:
        self.calls: list[RequestDescriptor] = []
        self.result = result if result is not None else {"ok": True}
        self.error = error

    def dispatch(self, descriptor: RequestDescriptor, callback) -> Any:
        self.calls.append(descriptor)
        if self.error is not None:
            callback(self.error, None)
            return None
        callback(None, self.result)
        return self.result


class CallbackRecorder:
    def __init__(self) -> None:
        self.calls: list[tuple[BaseException | None, Any]] = []

    def __call__(self, error: BaseException | None, result: Any) -> None:
        self.calls.append((error, result))

    @property
    def error(self) -> BaseException | None:
        return self.calls[-1][0]

    @property
    def result(self) -> Any:
        return self.calls[-1][1]
