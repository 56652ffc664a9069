"""Shared fixtures for honeycomb tool tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from fastmcp import FastMCP

from honeycomb import Hive

SEED_HEXES = [
    {
        "id": "customer-data-q4",
        "name": "Customer Data Q4",
        "type": "data",
        "contents": {"data": {"customers": 1250, "topAccounts": ["Acme Corp", "Globex"]}},
        "entryHints": ["customer metrics", "Q4 data", "sales figures"],
        "edges": [
            {
                "id": "to-finance",
                "to": "finance-reports",
                "when": {"intent": "revenue context"},
                "priority": 10,
                "description": "Go to finance for revenue breakdown",
            },
            {
                "id": "to-crm",
                "to": "external:salesforce",
                "when": {"intent": "update CRM"},
                "transform": {"pick": ["topAccounts"]},
                "priority": 5,
                "description": "Push top accounts to Salesforce",
            },
        ],
        "tags": ["data", "customers"],
    },
    {
        "id": "finance-reports",
        "name": "Finance Reports",
        "type": "data",
        "contents": {"data": {"growth": 0.18}},
        "entryHints": ["revenue", "financial data"],
        "tags": ["finance"],
        "description": "Quarterly revenue and expenses",
    },
]


@pytest.fixture
def mcp() -> FastMCP:
    return FastMCP("test")


@pytest.fixture
def hive(tmp_path: Path) -> Hive:
    """File-backed hive seeded with two hexes."""
    hive = Hive.from_path(tmp_path)

    async def _seed() -> None:
        for draft in SEED_HEXES:
            await hive.create_hex(draft)

    asyncio.run(_seed())
    return hive
