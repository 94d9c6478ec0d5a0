import pytest

from mcp_diagram_sanitizer.models.analysis import AnalysisResult, ComponentInfo, ScreenDescription


@pytest.fixture
def screens():
    return [
        ScreenDescription(screen_name="Login", description="Sign in"),
        ScreenDescription(screen_name="Home", description="Dashboard"),
        ScreenDescription(screen_name="Settings", description="Preferences"),
        ScreenDescription(screen_name="Profile", description="User profile"),
    ]


@pytest.fixture
def components():
    return [
        ComponentInfo(name="App", path="src/App.tsx", description="Root view"),
        ComponentInfo(name="AuthService", path="src/services/auth.ts", description="Handles login"),
        ComponentInfo(name="UserRepository", path="src/data/users.ts", description=""),
    ]


@pytest.fixture
def broken_result(screens, components):
    return AnalysisResult(
        overview="Sample project",
        components=components,
        business_flow_diagram="graph TD;",
        screen_transition_diagram="",
        screen_descriptions=screens[:2],
    )
