"""
Tests for the command-line interface.

The pipeline itself is patched out; these tests cover argument handling,
carry-forward input and output writing.
"""

import io
import json
from unittest.mock import patch

import pytest

from tld_data import __version__
from tld_data.cli import build_config, create_parser, dump_records, main, read_previous
from tld_data.enums import TLDType
from tld_data.exceptions import IntegrityError
from tld_data.models import BrandOverride, TLDRecord

RECORDS = [
    TLDRecord(tld="com", type=TLDType.GENERIC),
    TLDRecord(tld="москва", type=TLDType.GENERIC, periods=[],
              is_not_in_general_availability=False, is_brand=False, has_restrictions=False),
]

PREVIOUS_JSON = json.dumps([
    {"tld": "com", "type": "generic"},
    {"tld": "itv", "type": "generic", "isBrand": True, "hasRestrictions": False},
])


async def fake_pipeline(config, previous, logger):
    return RECORDS


class TestParser:

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_overrides_applied_to_config(self) -> None:
        args = create_parser().parse_args(
            ["--concurrency", "3", "--log-level", "debug", "--log-format", "json"]
        )

        with patch.dict("os.environ", {}, clear=True):
            config = build_config(args)

        assert config.concurrency == 3
        assert config.logging.level == "debug"
        assert config.logging.output_format == "json"


class TestPreviousData:

    def test_read_previous(self) -> None:
        previous = read_previous(io.StringIO(PREVIOUS_JSON))

        assert previous == {
            "com": BrandOverride(),
            "itv": BrandOverride(is_brand=True, has_restrictions=False),
        }

    def test_empty_stream_means_no_previous_data(self) -> None:
        assert read_previous(io.StringIO("  \n")) is None

    def test_stdin_is_passed_to_pipeline(self, capsys) -> None:
        with patch("tld_data.cli.run_pipeline") as run_pipeline, \
                patch("sys.stdin", io.StringIO(PREVIOUS_JSON)), \
                patch("tld_data.cli.load_dotenv"):
            run_pipeline.side_effect = fake_pipeline
            exit_code = main(["--stdin", "--log-level", "error"])

        assert exit_code == 0
        previous = run_pipeline.call_args.args[1]
        assert previous["itv"].is_brand is True
        assert json.loads(capsys.readouterr().out)[0] == {"tld": "com", "type": "generic"}

    def test_unreadable_previous_file(self, tmp_path, capsys) -> None:
        path = tmp_path / "previous.json"
        path.write_text("not json", encoding="utf-8")

        with patch("tld_data.cli.run_pipeline") as run_pipeline, \
                patch("tld_data.cli.load_dotenv"):
            exit_code = main(["--previous", str(path)])

        assert exit_code == 1
        run_pipeline.assert_not_called()
        assert "Could not read previous data" in capsys.readouterr().err


class TestMain:

    def test_writes_output_file(self, tmp_path) -> None:
        output = tmp_path / "tlds.json"

        with patch("tld_data.cli.run_pipeline", side_effect=fake_pipeline), \
                patch("tld_data.cli.load_dotenv"):
            exit_code = main(["--output", str(output), "--log-level", "error"])

        assert exit_code == 0
        written = json.loads(output.read_text(encoding="utf-8"))
        assert written[1]["tld"] == "москва"
        assert "москва" in output.read_text(encoding="utf-8")

    def test_pipeline_error_exit_code(self, capsys) -> None:
        async def failing_pipeline(config, previous, logger):
            raise IntegrityError("'newtld' must exist in the IANA DB but it didn't", {"tld": "newtld"})

        with patch("tld_data.cli.run_pipeline", side_effect=failing_pipeline), \
                patch("tld_data.cli.load_dotenv"):
            exit_code = main([])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert captured.out == ""
        assert "newtld" in captured.err

    def test_bad_config_path(self, tmp_path, capsys) -> None:
        with patch("tld_data.cli.load_dotenv"):
            exit_code = main(["--config", str(tmp_path / "missing.json")])

        assert exit_code == 1
        assert "Could not load config" in capsys.readouterr().err

    def test_dump_records(self) -> None:
        dumped = dump_records(RECORDS)

        assert json.loads(dumped) == [record.to_dict() for record in RECORDS]
        assert dumped.startswith("[\n  {")
