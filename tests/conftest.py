from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest


class FakePage:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def _record(self, name: str, *args: Any, **kwargs: Any) -> None:
        self.calls.append((name, args, kwargs))

    def goto(self, *args: Any, **kwargs: Any) -> None:
        self._record("goto", *args, **kwargs)

    def set_content(self, *args: Any, **kwargs: Any) -> None:
        self._record("set_content", *args, **kwargs)

    def set_viewport_size(self, *args: Any, **kwargs: Any) -> None:
        self._record("set_viewport_size", *args, **kwargs)

    def emulate_media(self, *args: Any, **kwargs: Any) -> None:
        self._record("emulate_media", *args, **kwargs)

    def screenshot(self, *args: Any, **kwargs: Any) -> None:
        self._record("screenshot", *args, **kwargs)
        Path(kwargs["path"]).write_bytes(b"\x89PNG")

    def pdf(self, *args: Any, **kwargs: Any) -> None:
        self._record("pdf", *args, **kwargs)
        Path(kwargs["path"]).write_bytes(b"%PDF-1.4")

    def names(self) -> list[str]:
        return [name for name, _, _ in self.calls]

    def call(self, name: str) -> tuple[tuple[Any, ...], dict[str, Any]]:
        for call_name, args, kwargs in self.calls:
            if call_name == name:
                return args, kwargs
        raise AssertionError(f"{name} was not called")


class FakeContext:
    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.closed = False

    def new_page(self) -> FakePage:
        return self.page

    def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self) -> None:
        self.page = FakePage()
        self.contexts: list[FakeContext] = []
        self.context_kwargs: list[dict[str, Any]] = []
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def new_context(self, **kwargs: Any) -> FakeContext:
        self.context_kwargs.append(kwargs)
        context = FakeContext(self.page)
        self.contexts.append(context)
        return context


@pytest.fixture
def fake_browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SITE2PDF_CONFIG", raising=False)
    return tmp_path
