"""Ensure interface adapter packages expose the expected metadata."""

from importlib import import_module

import pytest


@pytest.mark.parametrize(
    "package",
    ["src.adapters.interface", "src.adapters.interface.streamlit"],
)
def test_interface_packages_export_nothing(package) -> None:
    assert import_module(package).__all__ == []


def test_wealth_chart_module_exports_builders() -> None:
    module = import_module("src.adapters.interface.streamlit.wealth_chart")

    assert "build_wealth_chart_model" in module.__all__
    assert "build_plotly_figure" in module.__all__
