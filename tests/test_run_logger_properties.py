"""
Property-based tests for the Run Logger module.

Uses Hypothesis to check output formats and level filtering.
"""

import json
from io import StringIO

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tld_data.enums import LogLevel
from tld_data.exceptions import FetchError
from tld_data.run_logger import LEVEL_ORDER, RunLogger, create_logger


# Strategies for generating valid test data

@st.composite
def log_level_strategy(draw) -> LogLevel:
    """Generate valid LogLevel values."""
    return draw(st.sampled_from(list(LogLevel)))


@st.composite
def component_name_strategy(draw) -> str:
    """Generate valid component names."""
    return draw(st.text(
        alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-"),
        min_size=1,
        max_size=50,
    ))


@st.composite
def message_strategy(draw) -> str:
    """Generate valid log messages, including non-ASCII TLD labels."""
    return draw(st.text(
        alphabet=st.characters(
            whitelist_categories=('L', 'N', 'P', 'S', 'Zs'),
            blacklist_characters='\x00\n\r',
        ),
        min_size=1,
        max_size=200,
    ))


@st.composite
def data_strategy(draw) -> dict:
    """Generate small JSON-serializable data dictionaries."""
    return draw(st.dictionaries(
        keys=st.text(alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz_"), min_size=1, max_size=20),
        values=st.one_of(
            st.text(max_size=50),
            st.integers(min_value=-1000, max_value=1000),
            st.booleans(),
            st.none(),
            st.lists(st.sampled_from(["com", "москва", "موقع", "한국"]), max_size=5),
        ),
        max_size=5,
    ))


def output_lines(output: StringIO) -> list[str]:
    return output.getvalue().rstrip("\n").split("\n")


class TestOutputFormats:
    """Entries are written as JSON, as text, or as both."""

    @given(
        level=log_level_strategy(),
        component=component_name_strategy(),
        message=message_strategy(),
        data=data_strategy(),
    )
    @settings(max_examples=100)
    def test_both_formats_produce_two_lines(
        self,
        level: LogLevel,
        component: str,
        message: str,
        data: dict,
    ) -> None:
        """
        *For any* log entry when output_format is "both", the logger SHALL produce
        both a valid JSON line and a human-readable text line.
        """
        output = StringIO()
        logger = RunLogger(output_format="both", output_stream=output, level=LogLevel.DEBUG)

        entry = logger.log(level, component, message, data)

        lines = output_lines(output)
        assert len(lines) == 2, f"Expected 2 lines, got {len(lines)}"

        parsed = json.loads(lines[0])
        assert parsed["level"] == level.value
        assert parsed["component"] == component
        assert parsed["message"] == message
        assert parsed["data"] == data
        assert parsed["timestamp"] == entry.timestamp

        assert level.value.upper() in lines[1]
        assert f"[{component}]" in lines[1]
        assert message in lines[1]

    @given(level=log_level_strategy(), message=message_strategy())
    @settings(max_examples=50)
    def test_json_only_format(self, level: LogLevel, message: str) -> None:
        output = StringIO()
        logger = RunLogger(output_format="json", output_stream=output, level=LogLevel.DEBUG)

        logger.log(level, "Aggregator", message)

        (line,) = output_lines(output)
        assert json.loads(line)["message"] == message

    def test_text_format_keeps_unicode(self) -> None:
        output = StringIO()
        logger = RunLogger(output_format="text", output_stream=output)

        logger.log(LogLevel.INFO, "RootZone", "Found TLDs", {"sample": ["한국", "москва"]})

        (line,) = output_lines(output)
        assert line.endswith('[RootZone] Found TLDs {"sample": ["한국", "москва"]}')
        assert " INFO " in line

    def test_rejects_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            RunLogger(output_format="xml")


class TestLevelFiltering:

    @given(minimum=log_level_strategy(), level=log_level_strategy())
    @settings(max_examples=50)
    def test_entries_below_minimum_are_dropped(self, minimum: LogLevel, level: LogLevel) -> None:
        """
        *For any* minimum level, an entry SHALL be recorded and written exactly
        when its level is at or above the minimum.
        """
        output = StringIO()
        logger = RunLogger(output_stream=output, level=minimum)

        entry = logger.log(level, "Fetcher", "message")

        expected = LEVEL_ORDER[level] >= LEVEL_ORDER[minimum]
        assert (entry is not None) == expected
        assert (output.getvalue() != "") == expected
        assert len(logger.entries) == (1 if expected else 0)

    def test_create_logger_parses_level(self) -> None:
        output = StringIO()
        logger = create_logger("WARN", "json", output)

        logger.log(LogLevel.WARN, "CLI", "slow source")

        assert json.loads(output.getvalue())["message"] == "slow source"
        assert not logger.is_enabled_for(LogLevel.INFO)
        assert logger.is_enabled_for(LogLevel.ERROR)


class TestErrorContext:

    def test_pipeline_error_context(self) -> None:
        output = StringIO()
        logger = RunLogger(output_format="json", output_stream=output)
        error = FetchError("https://www.iana.org/domains/root/db", 503, "Service Unavailable")

        entry = logger.log_error("CLI", "Run failed", error, {"step": "iana"})

        assert entry.level == LogLevel.ERROR
        assert entry.data["step"] == "iana"
        assert entry.data["error_type"] == "FetchError"
        assert entry.data["error_code"] == "fetch_failed"
        assert entry.data["error_details"]["status_code"] == 503
        assert json.loads(output.getvalue())["data"]["error_message"] == "Service Unavailable"

    def test_plain_exception_context(self) -> None:
        logger = RunLogger(output_stream=StringIO())

        entry = logger.log_error("CLI", "Could not read previous data", ValueError("bad json"))

        assert entry.data == {"error_message": "bad json", "error_type": "ValueError"}

    def test_clear_entries(self) -> None:
        logger = RunLogger(output_stream=StringIO())
        logger.log(LogLevel.INFO, "CLI", "one")

        logger.clear_entries()

        assert logger.entries == []
