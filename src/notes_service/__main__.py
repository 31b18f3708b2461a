"""Allow ``python -m notes_service``."""

from notes_service.main import run

run()
