import logging

import pytest

from xcodebuild_mcp import __main__ as cli
from xcodebuild_mcp.config import get_runtime_config
from xcodebuild_mcp.logger import configure_logging
from xcodebuild_mcp.session_store import get_session_store


def test_parse_args_leaves_unset_flags_as_none():
    args = cli.parse_args([])
    assert args.debug is None
    assert args.disable_session_defaults is None
    assert args.incremental_builds is None

    args = cli.parse_args(["--debug", "--disable-session-defaults", "--log-file", "/tmp/x.log"])
    assert args.debug is True
    assert args.disable_session_defaults is True
    assert args.log_file == "/tmp/x.log"


def test_main_seeds_store_from_config_and_runs_server(tmp_path, monkeypatch):
    config_dir = tmp_path / ".xcodebuildmcp"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text(
        "sessionDefaultsProfiles:\n  ios:\n    scheme: App\nactiveSessionDefaultsProfile: ios\n"
    )
    ran = []

    async def fake_run_server():
        ran.append(True)

    monkeypatch.setattr(cli, "run_server", fake_run_server)
    monkeypatch.delenv("XCODEBUILDMCP_DEBUG", raising=False)

    cli.main(["--cwd", str(tmp_path), "--disable-session-defaults"])

    assert ran == [True]
    assert get_runtime_config().disable_session_defaults
    assert get_session_store().get_active_profile() == "ios"
    assert get_session_store().get_all() == {"scheme": "App"}


def test_main_exits_on_bad_config(tmp_path, capsys):
    config_dir = tmp_path / ".xcodebuildmcp"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text("- just\n- a list\n")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--cwd", str(tmp_path)])

    assert exc_info.value.code == 1
    assert "Expected a mapping" in capsys.readouterr().err


def test_configure_logging_levels_and_file(tmp_path):
    log_file = tmp_path / "server.log"

    logger = configure_logging(debug=True, log_file=str(log_file))
    logging.getLogger("xcodebuild_mcp.tools.build_sim").debug("hello from a tool")

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert "hello from a tool" in log_file.read_text()

    logger = configure_logging()
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
