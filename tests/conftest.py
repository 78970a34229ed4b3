"""Shared test fixtures for metro-schematic test suite."""

from __future__ import annotations

import pytest
from helpers import TRANSFER_TEXT, Y_LINE_TEXT, YGraph, build_y_graph

from metro_schematic.network.loader import parse_network
from metro_schematic.network.model import Network


# --- Pytest fixtures ---


@pytest.fixture
def y_graph() -> YGraph:
    """A Y-shaped graph branching at b."""
    return build_y_graph()


@pytest.fixture
def y_network() -> Network:
    """Parsed Y Line network (trunk w1-c, branches to e2 and n3)."""
    return parse_network(Y_LINE_TEXT)


@pytest.fixture
def transfer_network() -> Network:
    """Two crossing lines joined by a short walking transfer."""
    return parse_network(TRANSFER_TEXT)
