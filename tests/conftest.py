import pytest


@pytest.fixture
def dpg_context():
    """Fresh DearPyGui context (no viewport) with AppState at defaults."""
    dpg = pytest.importorskip("dearpygui.dearpygui")
    from cyclo_app.app_state import AppState

    dpg.create_context()
    AppState._initialized = False
    AppState.initialize()
    yield dpg
    AppState._initialized = False
    dpg.destroy_context()
