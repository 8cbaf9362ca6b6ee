import pytest

from xcodebuild_mcp.config import reset_runtime_config
from xcodebuild_mcp.session_store import get_session_store


@pytest.fixture(autouse=True)
def clean_session_state():
    get_session_store().clear()
    reset_runtime_config()
    yield
    get_session_store().clear()
    reset_runtime_config()
