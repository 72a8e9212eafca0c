"""
Integration tests for the mkcallable command line.

These tests run the complete pipeline through main() with the external
formatter disabled or mocked.
"""

import json
import shutil
from unittest.mock import Mock, patch

import pytest

from mkcallable.cli import build_parser, main
from mkcallable.utils.exceptions import FormatError

from conftest import ADD_SOURCE, FUNC_PLACEHOLDER_SOURCE, TIME_SOURCE


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.delenv("MKCALLABLE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MKCALLABLE_NO_FORMAT", raising=False)


class TestCommandLine:
    """Test end-to-end runs."""

    def test_no_files(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        assert "usage: mkcallable" in capsys.readouterr().err

    def test_stdout(self, write_go, capsys):
        path = write_go("add.go", ADD_SOURCE)
        assert main(["--no-format", str(path)]) == 0

        out = capsys.readouterr().out
        assert out.startswith("// Code generated by 'go generate'; DO NOT EDIT.\n")
        assert "func AddEx(fn func(int, int) (int)) ugo.CallableExFunc {" in out

    def test_output_file(self, write_go, tmp_path, capsys):
        path = write_go("time.go", TIME_SOURCE)
        output = tmp_path / "zz_generated.go"

        assert main(["--no-format", "--output", str(output), str(path)]) == 0
        assert capsys.readouterr().out == ""
        text = output.read_text()
        assert "package time" in text
        assert "func parse(" in text

    def test_export_and_extended(self, write_go, capsys):
        path = write_go("f.go", FUNC_PLACEHOLDER_SOURCE)
        main(["--no-format", "--export", "--extended", str(path)])

        out = capsys.readouterr().out
        assert "func FuncPisReEx(" in out
        assert "func FuncPisRe(" not in out

    def test_multiple_files(self, write_go, capsys):
        first = write_go("a.go", "package p\n//ugo:callable:convert *Time ToTime\n")
        second = write_go("b.go", "package p\n//ugo:callable since(t *Time) (ret ugo.Object)\n")
        main(["--no-format", str(first), str(second)])
        assert "t, ok := ToTime(args.Get(0))" in capsys.readouterr().out

    def test_config_file(self, write_go, tmp_path, capsys):
        config = tmp_path / "mkcallable.json"
        config.write_text(json.dumps({"generation": {"export": True}, "format": {"enabled": False}}))
        path = write_go("f.go", FUNC_PLACEHOLDER_SOURCE)

        main(["--config", str(config), str(path)])
        assert "func FuncPisRe(" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "source",
        [
            "package p\n//ugo:callable f(t *CustomThing)\n",
            "package p\n//ugo:callable f(a int) junk\n",
            "package p\n//ugo:callable:import tm \"time\"\n//ugo:callable:import \"time\"\n",
            "//ugo:callable f()\n",
        ],
    )
    def test_failures_exit_nonzero(self, write_go, tmp_path, capsys, source):
        path = write_go("bad.go", source)
        output = tmp_path / "out.go"

        with pytest.raises(SystemExit) as exc_info:
            main(["--no-format", "--output", str(output), str(path)])

        assert exc_info.value.code == 1
        assert not output.exists()
        assert capsys.readouterr().out == ""

    def test_missing_input(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--no-format", str(tmp_path / "missing.go")])
        assert exc_info.value.code == 1

    @patch("mkcallable.formatter.GoFormatter.format")
    def test_format_failure_prints_raw_source(self, mock_format, write_go, capsys):
        mock_format.side_effect = FormatError("rejected", raw_source="RAW SOURCE\n")
        path = write_go("add.go", ADD_SOURCE)

        with pytest.raises(SystemExit):
            main([str(path)])
        assert "RAW SOURCE" in capsys.readouterr().err

    @patch("mkcallable.formatter.subprocess.run")
    def test_formatter_diagnostics_reported(self, mock_run, write_go, capsys):
        mock_run.return_value = Mock(
            returncode=2,
            stdout="",
            stderr="<standard input>:7:3: expected ';', found 'IDENT'\n",
        )
        path = write_go("add.go", ADD_SOURCE)

        with pytest.raises(SystemExit) as exc_info:
            main([str(path)])

        err = capsys.readouterr().err
        assert exc_info.value.code == 1
        assert "<standard input>:7:3: expected ';', found 'IDENT'" in err
        assert "func AddEx(" in err

    @patch("mkcallable.formatter.subprocess.run")
    def test_unlocated_formatter_output_reported(self, mock_run, write_go, capsys):
        mock_run.return_value = Mock(returncode=1, stdout="", stderr="gofmt: internal failure\n")
        path = write_go("add.go", ADD_SOURCE)

        with pytest.raises(SystemExit):
            main([str(path)])
        assert "gofmt: internal failure\n" in capsys.readouterr().err

    def test_non_utf8_comment(self, tmp_path, capsys):
        path = tmp_path / "legacy.go"
        path.write_bytes(b"// Copyright \xe9 2020\npackage p\n//ugo:callable f(a int)\n")

        assert main(["--no-format", str(path)]) == 0
        assert "func fEx(" in capsys.readouterr().out

    def test_parser_flags(self):
        args = build_parser().parse_args(["a.go"])
        assert args.export is None
        assert args.extended is None
        assert args.format_enabled is None

        args = build_parser().parse_args(["--no-format", "--export", "a.go"])
        assert args.format_enabled is False
        assert args.export is True


@pytest.mark.requires_gofmt
@pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not available")
def test_gofmt_accepts_generated_source(write_go, capsys):
    path = write_go("time.go", TIME_SOURCE)
    assert main([str(path)]) == 0
    assert "func sleepEx(fn func(time.Duration)) ugo.CallableExFunc {" in capsys.readouterr().out
