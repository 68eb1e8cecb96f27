from svm_mcp import __main__ as entry
from svm_mcp import stdio_server
from svm_mcp.config import SvmConfig


def test_main_defaults_to_stdio(monkeypatch):
    seen = {}

    def fake_stdio(config):
        seen["config"] = config
        return 0

    monkeypatch.setattr(stdio_server, "main", fake_stdio)
    cfg = SvmConfig(transport="stdio")
    assert entry.main(cfg) == 0
    assert seen["config"] is cfg


def test_main_selects_http(monkeypatch):
    monkeypatch.setattr(entry, "run_http", lambda config: 0 if config.transport == "http" else 1)
    assert entry.main(SvmConfig(transport="http")) == 0


def test_run_http_failure_exit_code(monkeypatch):
    import uvicorn

    def broken_run(*_args, **_kwargs):
        raise OSError("address already in use")

    monkeypatch.setattr(entry, "configure_logging", lambda config: None)
    monkeypatch.setattr(uvicorn, "run", broken_run)
    assert entry.run_http(SvmConfig(transport="http")) == 1
