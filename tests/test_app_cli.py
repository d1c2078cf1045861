from __future__ import annotations

import pytest

from satpam import app as app_module


def test_main_without_serve_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    app_module.main([])

    assert "Satpam demo service." in capsys.readouterr().out


def test_main_serve_runs_uvicorn(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_run(app: object, **kwargs: object) -> None:
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr("uvicorn.run", fake_run)
    monkeypatch.setattr(app_module, "configure_logging", lambda: None)

    app_module.main(["--serve", "--host", "0.0.0.0", "--port", "9001"])

    assert captured["host"] == "0.0.0.0"
    assert captured["port"] == 9001
    assert captured["app"] is not None
