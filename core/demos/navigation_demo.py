#!/usr/bin/env python3
"""
Honeycomb Navigation Demo

Seeds a four-hex graph in a temporary directory and walks one agent through it:

    query -> enter -> next_steps -> traverse -> deposit

then routes a payload through a junction and hands a slice of it to an
external gateway.

Usage:
    cd core
    python demos/navigation_demo.py
"""

import asyncio
import json
import logging
import sys
import tempfile
from pathlib import Path

_CORE_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_CORE_DIR))  # honeycomb.*

from honeycomb import AgentContext, Hive  # noqa: E402
from honeycomb.observability import configure_logging  # noqa: E402

logger = logging.getLogger("navigation_demo")

HEXES = [
    {
        "id": "customer-data-q4",
        "name": "Customer Data Q4",
        "type": "data",
        "contents": {
            "data": {
                "customers": 1250,
                "revenue": 450000,
                "churn": 0.03,
                "topAccounts": ["Acme Corp", "Globex", "Initech"],
            }
        },
        "entryHints": ["customer metrics", "Q4 data", "sales figures", "customer count"],
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
        "tags": ["data", "customers", "q4"],
    },
    {
        "id": "finance-reports",
        "name": "Finance Reports",
        "type": "data",
        "contents": {"data": {"growth": 0.18}},
        "entryHints": ["revenue", "financial data", "quarterly reports", "expenses"],
        "edges": [
            {
                "id": "to-exec-summary",
                "to": "exec-summary",
                "when": {"intent": "executive summary"},
                "transform": {"pick": ["growth"]},
                "priority": 10,
                "description": "Summarize for executives",
            }
        ],
        "tags": ["finance", "reports"],
    },
    {
        "id": "data-router",
        "name": "Data Router",
        "type": "junction",
        "entryHints": ["route data", "where should this go"],
        "edges": [
            {
                "id": "route-to-customers",
                "to": "customer-data-q4",
                "when": {"match": {"kind": "customer"}},
                "transform": {"omit": ["kind"], "inject": {"routedBy": "data-router"}},
                "priority": 10,
                "description": "Route customer-related data",
            },
            {
                "id": "route-to-finance",
                "to": "finance-reports",
                "when": {"match": {"kind": "financial"}},
                "priority": 10,
                "description": "Route financial data",
            },
        ],
        "tags": ["routing", "junction"],
    },
    {
        "id": "salesforce-gateway",
        "name": "Salesforce Gateway",
        "type": "gateway",
        "contents": {
            "tools": [
                {
                    "name": "updateAccounts",
                    "description": "Update account records in Salesforce",
                    "parameters": {
                        "accounts": {
                            "type": "array",
                            "description": "Account names",
                            "required": True,
                        }
                    },
                    "handler": "salesforce:updateAccounts",
                }
            ]
        },
        "entryHints": ["CRM", "salesforce", "update accounts", "sync CRM"],
        "tags": ["gateway", "external", "salesforce"],
    },
]


async def main() -> None:
    configure_logging(level="WARNING", format="human")

    with tempfile.TemporaryDirectory() as tmp:
        hive = Hive.from_path(tmp)
        for draft in HEXES:
            await hive.create_hex(draft)
        print(f"Created {len(HEXES)} hexes in {tmp}\n")

        ctx = AgentContext(intent="customer Q4 metrics", origin="demo-agent", payload={})

        print("1. query: 'customer Q4 metrics'")
        results = await hive.query(ctx.intent, context=ctx)
        for r in results:
            print(f"   - {r.hex.name} (score {r.score:.2f}, hints: {', '.join(r.matched_hints)})")
        if not results:
            print("   no hexes found")
            return

        best = results[0].hex
        print(f"\n2. enter: {best.name}")
        entered = await hive.enter(best.id, ctx)
        print(f"   data: {json.dumps(entered.contents.data)[:100]}...")

        ctx.intent = "revenue context"
        print("\n3. next_steps with intent 'revenue context'")
        edges = await hive.next_steps(best.id, ctx)
        for edge in edges:
            print(f"   - {edge.id} -> {edge.to} (priority {edge.priority})")

        if edges:
            outcome = await hive.traverse(best.id, edges[0].id, ctx)
            print(f"\n4. traverse {edges[0].id}: {outcome.to_dict()}")
            ctx = ctx.step_to(outcome.destination, outcome.payload)

        print("\n5. deposit a note on finance-reports")
        await hive.deposit("finance-reports", {"reviewedBy": "demo-agent"}, ctx)

        print("\n6. route a customer payload through the junction")
        router_ctx = AgentContext(
            origin="demo-agent",
            payload={"kind": "customer", "topAccounts": ["Acme Corp"], "secret": "x"},
        )
        routed = await hive.traverse("data-router", "route-to-customers", router_ctx)
        print(f"   {routed.to_dict()}")

        crm_ctx = AgentContext(intent="sync CRM", origin="demo-agent", payload=routed.payload)
        handoff = await hive.traverse("customer-data-q4", "to-crm", crm_ctx)
        print(f"   handoff: {handoff.to_dict()}")

        print("\nJOURNEY (in memory):")
        journey = hive.get_journey("demo-agent")
        for step in journey.steps if journey else []:
            print(f"  [{step.action.upper()}] {step.hex_id}")

        print(f"\nDurable log entries: {len(await hive.journey_log())}")


if __name__ == "__main__":
    asyncio.run(main())
