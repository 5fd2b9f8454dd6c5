# app/core/navigation.py
from dataclasses import dataclass
from typing import List


@dataclass
class NavSection:
    """Represents a navigation section"""
    key: str
    title: str
    icon: str
    pages: List[tuple]  # List of (route_stem, title, default)


NAV_SECTIONS = [
    NavSection(
        key="main",
        title="Main",
        icon="🏠",
        pages=[
            ("home", "🏠 Home", True),
            ("students", "👨‍🎓 Students", False),
        ]
    ),
    NavSection(
        key="configuration",
        title="Configuration",
        icon="⚙️",
        pages=[
            ("settings", "⚙️ Settings", False),
        ]
    ),
]


def page_path(route_stem: str) -> str:
    """Page script for a route, relative to the app directory."""
    return f"screens/{route_stem}/page.py"
