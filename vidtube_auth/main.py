"""Main application entry point.

Run with ``uvicorn vidtube_auth.main:app``.
"""

from vidtube_auth.core.application import create_application
from vidtube_auth.core.initialization import initialize_application

initialize_application()

app = create_application()
