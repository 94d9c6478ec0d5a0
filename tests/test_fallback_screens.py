import pytest

from mcp_diagram_sanitizer.engine.driver import ensure_graph_diagrams
from mcp_diagram_sanitizer.engine.fallback import (
    DATA_KEYWORDS,
    build_business_flow_fallback,
    build_fallback_diagram,
    build_screen_transition_fallback,
    pick_component_label,
)
from mcp_diagram_sanitizer.engine.sanity import is_renderable_flow_graph
from mcp_diagram_sanitizer.engine.screens import (
    ensure_screen_descriptions_match_diagram,
    extract_screen_names,
    placeholder_screen,
    synchronize_screen_descriptions,
)
from mcp_diagram_sanitizer.models.analysis import AnalysisResult, ComponentInfo, ScreenDescription


class TestBusinessFlowFallback:

    def test_layout(self, screens, components):
        assert build_business_flow_fallback(screens, components).split("\n") == [
            "graph TD",
            '  User["User initiates action"]',
            '  UI0["Login"]',
            '  UI1["Home"]',
            '  UI2["Settings"]',
            '  Logic["AuthService - Handles login"]',
            '  Data["UserRepository"]',
            '  Outcome["Business outcome delivered"]',
            "  User --> UI0",
            "  UI0 --> UI1",
            "  UI1 --> UI2",
            "  UI2 --> Logic",
            "  Logic --> Data",
            "  Data --> Logic",
            "  Logic --> Outcome",
        ]

    def test_no_inputs_still_renderable(self):
        out = build_business_flow_fallback([], [])
        assert is_renderable_flow_graph(out)
        assert 'UI0["Primary Screen"]' in out
        assert 'Logic["Application Logic Layer"]' in out
        assert 'Data["Data Store"]' in out

    def test_labels_are_escaped(self):
        out = build_business_flow_fallback([ScreenDescription(screen_name='Say "hi"')], [])
        assert 'UI0["Say \\"hi\\""]' in out
        assert is_renderable_flow_graph(out)

    def test_component_matched_by_path(self):
        comps = [ComponentInfo(name="Foo", path="src/db/foo.py", description="")]
        assert pick_component_label(comps, DATA_KEYWORDS, "none") == "Foo"
        assert pick_component_label([], DATA_KEYWORDS, "none") == "none"


class TestScreenTransitionFallback:

    def test_linear_chain(self, screens):
        out = build_screen_transition_fallback(screens[:2]).split("\n")
        assert out == [
            "graph TD",
            '  Start["User Entry"]',
            '  Screen0["Login"]',
            '  Screen1["Home"]',
            '  EndPoint["Goal Achieved"]',
            "  Start --> Screen0",
            "  Screen0 --> Screen1",
            "  Screen1 --> EndPoint",
        ]

    def test_placeholders(self):
        out = build_screen_transition_fallback([])
        assert 'Screen0["Main Screen"]' in out
        assert is_renderable_flow_graph(out)
        blank = build_screen_transition_fallback([ScreenDescription(screen_name="  ")])
        assert 'Screen0["Screen 1"]' in blank

    def test_dispatch_by_kind(self, broken_result):
        assert "Start" in build_fallback_diagram("screen_transition", broken_result)
        assert "Outcome" in build_fallback_diagram("business_flow", broken_result)


class TestScreenSync:

    def test_extract_names(self):
        diagram = 'graph TD\nA["Login"] --> B( "Home" )\nC{"login"}\nD[unquoted]'
        assert extract_screen_names(diagram) == ["Login", "Home"]
        assert extract_screen_names(None) == []

    def test_missing_screen_gets_placeholder(self):
        home = ScreenDescription(screen_name="Home", description="Dashboard")
        synced = synchronize_screen_descriptions(["Login", "Home"], [home])
        assert [s.screen_name for s in synced] == ["Login", "Home"]
        assert synced[0] == placeholder_screen("Login")
        assert synced[1] is home

    def test_extras_are_appended_in_order(self):
        listed = [ScreenDescription(screen_name=n) for n in ("Zed", "home", "Alpha")]
        synced = synchronize_screen_descriptions(["Home"], listed)
        assert [s.screen_name for s in synced] == ["home", "Zed", "Alpha"]

    def test_no_labels_is_noop(self, screens):
        result = AnalysisResult(screen_transition_diagram="graph TD\nA-->B", screen_descriptions=screens)
        assert ensure_screen_descriptions_match_diagram(result) is result

    def test_placeholder_text(self):
        p = placeholder_screen("Cart")
        assert p.description == "Cart screen (auto-generated placeholder)."
        assert p.ui_elements and p.events and p.validations

    @pytest.mark.parametrize("name", ["_Admin_", "'Login'", "C:\\Users"])
    def test_fallback_labels_reuse_their_description(self, name):
        screen = ScreenDescription(screen_name=name, description="Existing")
        synced = ensure_graph_diagrams(AnalysisResult(screen_descriptions=[screen])).screen_descriptions
        assert [s.screen_name for s in synced] == ["User Entry", name, "Goal Achieved"]
        assert synced[1] == screen
