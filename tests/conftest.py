"""
Pytest configuration and fixtures for the test suite.

Settings are pinned before any application module is imported so a local
.env file cannot switch the app into live mode during tests.
"""

import os

os.environ["ENVIRONMENT"] = "test"
os.environ["MOCK_OPENAI"] = "true"
os.environ.pop("OPENAI_API_KEY", None)
