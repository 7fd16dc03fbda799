from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from evalsummary.cli import build_parser, main

KEY = "sk-ant-test-key-123456"


class TestParser:
    def test_analyze_defaults(self) -> None:
        args = build_parser().parse_args(["analyze", "eval.pdf", "--api-key", KEY])
        assert args.file == "eval.pdf"
        assert args.api_key == KEY
        assert args.mode == "text"
        assert args.yes is False
        assert args.server is None
        assert args.timeout is None

    def test_analyze_requires_api_key(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["analyze", "eval.pdf"])
        assert exc_info.value.code == 2

    def test_rejects_unknown_mode(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["analyze", "eval.pdf", "--api-key", KEY, "--mode", "fax"])
        assert exc_info.value.code == 2

    def test_requires_command(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2


class TestMain:
    def test_serve(self) -> None:
        with patch("evalsummary.cli.serve") as serve:
            assert main(["serve", "--host", "0.0.0.0", "--port", "8080"]) == 0
        _, kwargs = serve.call_args
        assert kwargs == {"host": "0.0.0.0", "port": 8080}

    def test_analyze_runs_runner(self, tmp_path: Path) -> None:
        runner = MagicMock()
        runner.run.return_value = 0
        with (
            patch("evalsummary.cli.ApiClient") as api_cls,
            patch("evalsummary.cli.AnalysisRunner", return_value=runner),
        ):
            exit_code = main(
                [
                    "analyze",
                    str(tmp_path / "eval.pdf"),
                    "--api-key",
                    KEY,
                    "--server",
                    "http://server.test",
                    "--mode",
                    "direct",
                    "--yes",
                    "--timeout",
                    "30",
                ]
            )
        assert exit_code == 0
        api_cls.assert_called_once_with("http://server.test", timeout_seconds=30.0)
        runner.run.assert_called_once_with(
            tmp_path / "eval.pdf", KEY, mode="direct", assume_yes=True, output_path=None
        )
        api_cls.return_value.close.assert_called_once()

    def test_analyze_failure_exit_code(self, tmp_path: Path) -> None:
        runner = MagicMock()
        runner.run.return_value = 1
        with (
            patch("evalsummary.cli.ApiClient"),
            patch("evalsummary.cli.AnalysisRunner", return_value=runner),
        ):
            assert main(["analyze", str(tmp_path / "x.pdf"), "--api-key", KEY]) == 1
