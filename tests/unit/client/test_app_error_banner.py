"""
Tests for the Streamlit page's error banner, driven with streamlit's AppTest.
"""

import asyncio
from pathlib import Path

from streamlit.testing.v1 import AppTest

from conversation.orchestrator import EMPTY_QUESTION_MESSAGE, ConversationOrchestrator
from conversation.query_clients import DemoImageQueryClient
from conversation.transient_message import TransientMessage

APP_PATH = Path(__file__).resolve().parents[3] / "Client" / "app.py"


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def run_app(orchestrator: ConversationOrchestrator) -> AppTest:
    app_test = AppTest.from_file(str(APP_PATH), default_timeout=30)
    app_test.session_state["orchestrator"] = orchestrator
    app_test.session_state["uploader_key"] = 0
    return app_test.run()


def test_error_banner_disappears_once_display_window_passes():
    clock = FakeClock()
    orchestrator = ConversationOrchestrator(
        DemoImageQueryClient(), error_message=TransientMessage(ttl=10.0, clock=clock)
    )
    asyncio.run(orchestrator.submit("   "))

    app_test = run_app(orchestrator)
    assert [banner.value for banner in app_test.error] == [EMPTY_QUESTION_MESSAGE]

    clock.now = 10.0
    app_test.run()
    assert len(app_test.error) == 0
