"""Tests for the hive MCP tools.

Each tool is pulled off the FastMCP instance and awaited directly against a
file-backed hive seeded under tmp_path.
"""

from __future__ import annotations

import pytest
from fastmcp import FastMCP

from honeycomb import Hive
from honeycomb.observability import clear_trace_context, get_trace_context
from honeycomb_tools.tools import register_all_tools
from honeycomb_tools.tools.hive_tool import register_tools


@pytest.fixture
def tools(mcp: FastMCP, hive: Hive) -> dict:
    register_tools(mcp, hive=hive)
    return {name: tool.fn for name, tool in mcp._tool_manager._tools.items()}


class TestRegistration:
    def test_register_all_tools_lists_registered_names(self, mcp: FastMCP, hive: Hive):
        names = register_all_tools(mcp, hive=hive)
        assert sorted(names) == sorted(mcp._tool_manager._tools.keys())
        assert "hive_traverse" in names


class TestQueryTool:
    @pytest.mark.asyncio
    async def test_query(self, tools):
        result = await tools["hive_query"](intent="customer metrics")
        assert result["total"] >= 1
        assert result["results"][0]["id"] == "customer-data-q4"
        assert "customer metrics" in result["results"][0]["matchedHints"]

    @pytest.mark.asyncio
    async def test_query_with_origin_is_journaled(self, tools, hive: Hive):
        await tools["hive_query"](intent="revenue", origin="agent-1")
        log = await hive.journey_log()
        assert log[-1].action == "query"
        assert log[-1].journey_id == "agent-1"

    @pytest.mark.asyncio
    async def test_query_without_matches(self, tools):
        assert await tools["hive_query"](intent="zebra") == {"results": [], "total": 0}


class TestEnterAndNextSteps:
    @pytest.mark.asyncio
    async def test_enter(self, tools):
        result = await tools["hive_enter"](hex_id="customer-data-q4", origin="agent-1")
        assert result["contents"]["data"]["customers"] == 1250
        assert [e["id"] for e in result["edges"]] == ["to-finance", "to-crm"]

    @pytest.mark.asyncio
    async def test_enter_missing(self, tools):
        result = await tools["hive_enter"](hex_id="nope")
        assert result == {"success": False, "error": "Hex not found", "hexId": "nope"}

    @pytest.mark.asyncio
    async def test_enter_without_context_is_not_journaled(self, tools, hive: Hive):
        result = await tools["hive_enter"](hex_id="finance-reports")
        assert result["id"] == "finance-reports"
        assert await hive.journey_log() == []

    @pytest.mark.asyncio
    async def test_enter_with_intent_is_journaled(self, tools, hive: Hive):
        await tools["hive_enter"](hex_id="finance-reports", intent="revenue")
        log = await hive.journey_log()
        assert [(e.hex_id, e.journey_id) for e in log] == [("finance-reports", "anonymous")]

    @pytest.mark.asyncio
    async def test_next_steps_filters_by_intent(self, tools):
        result = await tools["hive_next_steps"](
            hex_id="customer-data-q4", intent="revenue context"
        )
        assert [e["id"] for e in result["edges"]] == ["to-finance"]
        assert result["edges"][0]["when"] == {"intent": "revenue context"}

    @pytest.mark.asyncio
    async def test_next_steps_without_intent_offers_all(self, tools):
        result = await tools["hive_next_steps"](hex_id="customer-data-q4")
        assert [e["id"] for e in result["edges"]] == ["to-finance", "to-crm"]


class TestTraverseTool:
    @pytest.mark.asyncio
    async def test_external_handoff(self, tools):
        result = await tools["hive_traverse"](
            hex_id="customer-data-q4",
            edge_id="to-crm",
            intent="sync CRM",
            payload={"topAccounts": ["Acme Corp"], "internal": True},
            origin="agent-1",
        )
        assert result == {
            "success": True,
            "destination": "external:salesforce",
            "payload": {"topAccounts": ["Acme Corp"]},
            "external": True,
        }

    @pytest.mark.asyncio
    async def test_condition_not_met(self, tools):
        result = await tools["hive_traverse"](
            hex_id="customer-data-q4", edge_id="to-finance", intent="zebra"
        )
        assert result == {
            "success": False,
            "destination": "finance-reports",
            "error": "Edge condition not met",
        }

    @pytest.mark.asyncio
    async def test_unknown_source(self, tools):
        result = await tools["hive_traverse"](hex_id="nope", edge_id="to-finance")
        assert result["error"] == "Source hex not found"


class TestDepositTool:
    @pytest.mark.asyncio
    async def test_deposit_merges(self, tools, hive: Hive):
        result = await tools["hive_deposit"](
            hex_id="finance-reports", data={"reviewed": True}, origin="agent-1"
        )
        assert result == {"success": True, "hexId": "finance-reports"}
        hex = await hive.get_hex("finance-reports")
        assert hex.contents.data == {"growth": 0.18, "reviewed": True}

    @pytest.mark.asyncio
    async def test_deposit_missing_hex(self, tools):
        result = await tools["hive_deposit"](hex_id="nope", data={"a": 1})
        assert result == {"success": False, "hexId": "nope", "error": "Hex not found"}


class TestManagementTools:
    @pytest.mark.asyncio
    async def test_create_hex(self, tools, hive: Hive):
        result = await tools["hive_create_hex"](
            id="exec-summary",
            name="Executive Summary",
            type="junction",
            entry_hints=["executive summary"],
            tags=["summary"],
            edges=[
                {
                    "id": "to-finance",
                    "to": "finance-reports",
                    "when": {"always": True},
                    "priority": 1,
                    "description": "Back to finance",
                }
            ],
        )
        assert result == {
            "success": True,
            "hex": {"id": "exec-summary", "name": "Executive Summary", "type": "junction"},
        }
        assert (await hive.get_hex("exec-summary")).edges[0].to == "finance-reports"

    @pytest.mark.asyncio
    async def test_create_hex_invalid_type(self, tools):
        result = await tools["hive_create_hex"](
            id="bad", name="Bad", type="spaceship", entry_hints=[], tags=[]
        )
        assert result["success"] is False
        assert result["error"].startswith("Invalid hex")

    @pytest.mark.asyncio
    async def test_create_hex_unsafe_id(self, tools):
        result = await tools["hive_create_hex"](
            id="../escape", name="Bad", type="data", entry_hints=[], tags=[]
        )
        assert result["success"] is False

    @pytest.mark.asyncio
    async def test_list_hexes(self, tools):
        result = await tools["hive_list_hexes"]()
        assert result["total"] == 2
        by_id = {h["id"]: h for h in result["hexes"]}
        assert by_id["customer-data-q4"]["edgeCount"] == 2
        assert by_id["finance-reports"]["description"] == "Quarterly revenue and expenses"
        assert "description" not in by_id["customer-data-q4"]

    @pytest.mark.asyncio
    async def test_journey_log(self, tools):
        await tools["hive_enter"](hex_id="finance-reports", origin="agent-1")
        await tools["hive_deposit"](hex_id="finance-reports", data={"a": 1}, origin="agent-1")

        result = await tools["hive_journey_log"](limit=1)
        assert result["total"] == 1
        assert result["steps"][0]["action"] == "deposit"
        assert result["steps"][0]["journeyId"] == "agent-1"


class TestTraceContext:
    def teardown_method(self):
        clear_trace_context()

    @pytest.mark.asyncio
    async def test_tool_name_and_journey_tagged(self, tools):
        await tools["hive_traverse"](
            hex_id="customer-data-q4", edge_id="to-finance", intent="revenue", origin="agent-1"
        )
        assert get_trace_context() == {"tool": "hive_traverse", "journey_id": "agent-1"}

    @pytest.mark.asyncio
    async def test_previous_call_context_is_reset(self, tools):
        await tools["hive_deposit"](hex_id="finance-reports", data={"a": 1}, origin="agent-1")
        await tools["hive_list_hexes"]()
        assert get_trace_context() == {"tool": "hive_list_hexes"}
