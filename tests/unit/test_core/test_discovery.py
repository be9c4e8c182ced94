"""Tests for capability discovery."""

from unittest.mock import AsyncMock

import pytest
from conftest import DEFAULT_LISTING

from bash_toolkit.discovery import (
    BASH_TOOLS,
    PROBE_COMMAND,
    DiscoveredTools,
    detect_format,
    discover_available_tools,
    get_tools_by_category,
    get_tools_for_format,
    parse_listing,
)
from bash_toolkit.types import CommandResult


def _sandbox(result=None, error=None):
    sandbox = AsyncMock()
    if error is not None:
        sandbox.execute_command = AsyncMock(side_effect=error)
    else:
        sandbox.execute_command = AsyncMock(return_value=result)
    return sandbox


class TestToolTable:
    """Tests for the static tool classification."""

    def test_tool_names_are_unique(self):
        """Each tool appears once."""
        names = [tool.name for tool in BASH_TOOLS]
        assert len(names) == len(set(names))

    def test_categories(self):
        """Well-known tools land in the expected categories."""
        assert get_tools_by_category("json") == ["jq"]
        assert get_tools_by_category("yaml") == ["yq"]
        assert "grep" in get_tools_by_category("text")
        assert "mlr" in get_tools_by_category("csv-tsv")

    def test_csv_hint_includes_yq_only_on_virtual_shells(self):
        """yq is only suggested for CSV on virtual shells."""
        assert get_tools_for_format("csv", virtual_shell=True) == ["yq", "awk", "cut"]
        assert get_tools_for_format("csv") == ["awk", "cut"]

    def test_json_hint_order(self):
        """Format hints keep their fixed order."""
        assert get_tools_for_format("json") == ["jq", "grep", "sed"]


class TestDetectFormat:
    """Tests for detect_format."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("data.json", "json"),
            ("conf/app.yaml", "yaml"),
            ("app.YML", "yaml"),
            ("rows.csv", "csv"),
            ("rows.tsv", "csv"),
            ("main.py", None),
            ("Makefile", None),
        ],
    )
    def test_detects_by_extension(self, filename, expected):
        """Extensions map to formats case-insensitively."""
        assert detect_format(filename) == expected


class TestParseListing:
    """Tests for parse_listing."""

    def test_skips_headers_and_blank_lines(self):
        """Directory headers and blank lines are ignored."""
        names = parse_listing("/usr/bin:\ncat\n\n/usr/local/bin:\njq\ncat\n")
        assert names == {"cat", "jq"}


class TestDiscoverAvailableTools:
    """Tests for discover_available_tools."""

    @pytest.mark.asyncio
    async def test_classifies_probe_output(self):
        """Listed binaries are split into known and unrecognized names."""
        sandbox = _sandbox(CommandResult(stdout=DEFAULT_LISTING + "\nmybin"))

        discovered = await discover_available_tools(sandbox)

        sandbox.execute_command.assert_awaited_once_with(PROBE_COMMAND)
        assert discovered.available == frozenset(
            {"cat", "grep", "sed", "awk", "head", "tail", "sort", "cut", "jq", "yq"}
        )
        assert discovered.unrecognized == frozenset({"mybin"})
        assert discovered.more_available is True

    @pytest.mark.asyncio
    async def test_accepts_raw_dict_results(self):
        """Custom sandboxes may return plain dicts."""
        sandbox = _sandbox({"stdout": "jq\n", "stderr": "", "exitCode": 0})
        discovered = await discover_available_tools(sandbox)
        assert discovered.available == frozenset({"jq"})
        assert discovered.more_available is False

    @pytest.mark.asyncio
    async def test_virtual_shell_always_has_more(self):
        """Virtual shells report more tools whenever any were found."""
        sandbox = _sandbox(CommandResult(stdout=DEFAULT_LISTING))
        discovered = await discover_available_tools(sandbox, virtual_shell=True)
        assert discovered.unrecognized == frozenset()
        assert discovered.more_available is True

    @pytest.mark.asyncio
    async def test_probe_exception_yields_empty_result(self, caplog):
        """A failing probe is logged and treated as no tools."""
        sandbox = _sandbox(error=RuntimeError("connection reset"))

        discovered = await discover_available_tools(sandbox)

        assert discovered == DiscoveredTools()
        assert "connection reset" in caplog.text

    @pytest.mark.asyncio
    async def test_non_zero_exit_yields_empty_result(self):
        """A probe exiting non-zero yields no tools."""
        sandbox = _sandbox(CommandResult(stdout="cat\n", exit_code=2))
        assert await discover_available_tools(sandbox) == DiscoveredTools()

    @pytest.mark.asyncio
    async def test_empty_listing(self):
        """An empty listing is not 'more available'."""
        sandbox = _sandbox(CommandResult(stdout=""))
        discovered = await discover_available_tools(sandbox, virtual_shell=True)
        assert discovered.available == frozenset()
        assert discovered.more_available is False
