"""Tests for the MCP server handlers."""

import json
import logging
import sys

import pytest

from fmemo_mcp.server import call_tool, list_tools, setup_logging


def _payload(contents) -> dict:
    assert len(contents) == 1
    assert contents[0].type == "text"
    return json.loads(contents[0].text)


class TestListTools:
    @pytest.mark.asyncio
    async def test_tool_names(self):
        tools = await list_tools()
        names = {tool.name for tool in tools}
        assert names == {"get_tree", "get_file", "get_outline", "search_memos", "parse_text"}

    @pytest.mark.asyncio
    async def test_schemas_are_objects(self):
        for tool in await list_tools():
            assert tool.inputSchema["type"] == "object"

    @pytest.mark.asyncio
    async def test_root_not_exposed(self):
        for tool in await list_tools():
            assert "root" not in tool.inputSchema["properties"]


class TestCallTool:
    @pytest.mark.asyncio
    async def test_parse_text(self):
        result = _payload(await call_tool("parse_text", {"text": "# A\n<desc>d</desc>\n## B\n"}))
        assert result["memos"][0]["description"] == "d"
        assert result["memos"][0]["children"][0]["title"] == "B"

    @pytest.mark.asyncio
    async def test_get_file(self, sample_memo_dir, monkeypatch):
        monkeypatch.setenv("FMEMO_ROOT", str(sample_memo_dir))
        result = _payload(await call_tool("get_file", {"file_path": "index.fmemo"}))
        assert result["memos"][0]["title"] == "Index"

    @pytest.mark.asyncio
    async def test_get_tree(self, sample_memo_dir, monkeypatch):
        monkeypatch.setenv("FMEMO_ROOT", str(sample_memo_dir))
        result = _payload(await call_tool("get_tree", {}))
        assert "guides/setup.fmemo" in result["files"]

    @pytest.mark.asyncio
    async def test_get_outline(self, sample_memo_dir, monkeypatch):
        monkeypatch.setenv("FMEMO_ROOT", str(sample_memo_dir))
        result = _payload(await call_tool("get_outline", {"file_path": "guides/setup.fmemo"}))
        assert result["outline"][0]["title"] == "Setup"

    @pytest.mark.asyncio
    async def test_search_memos(self, sample_memo_dir, monkeypatch):
        monkeypatch.setenv("FMEMO_ROOT", str(sample_memo_dir))
        result = _payload(await call_tool("search_memos", {"query": "topics"}))
        assert result["results"][0]["title"] == "Topics"

    @pytest.mark.asyncio
    async def test_categorized_error(self, sample_memo_dir, monkeypatch):
        monkeypatch.setenv("FMEMO_ROOT", str(sample_memo_dir))
        result = _payload(await call_tool("get_file", {"file_path": "../escape.fmemo"}))
        assert result["kind"] == "outside_root"

    @pytest.mark.asyncio
    async def test_root_argument_ignored(self, sample_memo_dir, tmp_path_factory, monkeypatch):
        private = tmp_path_factory.mktemp("private")
        (private / "diary.md").write_text("# Secret\nhidden body\n")
        monkeypatch.setenv("FMEMO_ROOT", str(sample_memo_dir))
        result = _payload(await call_tool("get_file", {
            "file_path": "diary.md",
            "root": str(private),
        }))
        assert "memos" not in result
        assert result["kind"] == "not_found"

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        result = _payload(await call_tool("nope", {}))
        assert result["error"] == "Unknown tool: nope"

    @pytest.mark.asyncio
    async def test_missing_argument(self):
        result = _payload(await call_tool("parse_text", {}))
        assert "error" in result


class TestSetupLogging:
    def test_adds_single_stderr_handler(self):
        root = logging.getLogger()
        saved_handlers = list(root.handlers)
        saved_level = root.level
        try:
            setup_logging("DEBUG")
            setup_logging("DEBUG")
            stderr_handlers = [
                h for h in root.handlers
                if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
            ]
            assert len(stderr_handlers) == 1
            assert root.level == logging.DEBUG
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
