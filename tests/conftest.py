"""Test setup for stackspec."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    Deep-tree tests build inputs far beyond the interpreter recursion limit:
        pytest -m "not slow"  # skip them
    """
    config.addinivalue_line(
        "markers",
        "slow: marks tests that validate very large or very deep trees",
    )


@pytest.fixture
def sales_navigation() -> list[dict[str, Any]]:
    """A sidebar with a nested group, an object with views, and leaf items."""
    return [
        {"id": "nav_home", "label": "Home", "type": "dashboard", "dashboardName": "home"},
        {
            "id": "nav_sales",
            "label": "Sales",
            "icon": "briefcase",
            "type": "group",
            "children": [
                {
                    "id": "nav_accounts",
                    "label": "Accounts",
                    "type": "object",
                    "objectName": "account",
                    "children": [
                        {
                            "id": "nav_accounts_mine",
                            "label": "My Accounts",
                            "type": "object",
                            "objectName": "account",
                            "viewName": "mine",
                        },
                    ],
                },
                {
                    "id": "nav_pipeline",
                    "label": {"key": "nav.pipeline", "defaultValue": "Pipeline"},
                    "type": "page",
                    "pageName": "pipeline_board",
                    "params": {"mode": "kanban"},
                },
            ],
        },
        {
            "id": "nav_docs",
            "label": "Documentation",
            "type": "url",
            "url": "https://docs.example.com",
            "target": "_blank",
        },
    ]


@pytest.fixture
def profile_card() -> dict[str, Any]:
    """A card holding a badge, a button, and a generic divider."""
    return {
        "type": "card",
        "props": {"title": "User Profile", "subtitle": "Account Details", "elevation": 2},
        "style": {"padding": "16px"},
        "children": [
            {"type": "badge", "props": {"label": "Premium", "variant": "success"}},
            {"type": "button", "props": {"label": "Edit", "variant": "primary"}},
            {"type": "divider"},
        ],
    }
