"""
Notes Client

HTTP client and view state for the notes UI.

The UI keeps a local copy of the note list purely for rendering. After a
create or delete the copy is patched from the server response instead of
re-fetching; it can be rebuilt at any time from ``list_notes()``.
"""

from __future__ import annotations

import html
from collections.abc import Iterator
from datetime import datetime
from typing import Any, TypedDict

import httpx

DEFAULT_TIMEOUT = 10.0
INVALID_RESPONSE = "Invalid response from server"


class NoteData(TypedDict):
    """Note as returned by the API."""

    id: str
    title: str
    content: str
    created_at: str
    updated_at: str


class NotesApiError(Exception):
    """
    A failed API call.

    ``message`` is the server's ``error`` text when it sent one, so the UI
    can show it verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


# ---------------------------------------------------------------------------
# API Client
# ---------------------------------------------------------------------------


class NotesApiClient:
    """
    Thin synchronous wrapper over the notes REST API.

    Args:
        base_url: API root including the prefix, e.g. ``http://localhost:5000/api``.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            with httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise NotesApiError(f"Connection failed: {e}") from e

        if response.is_error:
            raise NotesApiError(
                _error_message(response), status_code=response.status_code
            )
        # Every endpoint answers with a JSON object; anything else (e.g. an
        # HTML page from a misrouted proxy) is a server fault
        try:
            data = response.json()
        except ValueError as e:
            raise NotesApiError(
                INVALID_RESPONSE, status_code=response.status_code
            ) from e
        if not isinstance(data, dict):
            raise NotesApiError(INVALID_RESPONSE, status_code=response.status_code)
        return data

    def list_notes(self) -> list[NoteData]:
        data = self._request("GET", "/notes")
        notes = data.get("notes", [])
        if not isinstance(notes, list) or not all(isinstance(n, dict) for n in notes):
            raise NotesApiError(INVALID_RESPONSE)
        return notes

    def get_note(self, note_id: str) -> NoteData:
        note: NoteData = self._request("GET", f"/notes/{note_id}")
        return note

    def create_note(self, title: str, content: str) -> NoteData:
        note: NoteData = self._request(
            "POST", "/notes", json={"title": title, "content": content}
        )
        return note

    def update_note(self, note_id: str, title: str, content: str) -> NoteData:
        note: NoteData = self._request(
            "PUT", f"/notes/{note_id}", json={"title": title, "content": content}
        )
        return note

    def delete_note(self, note_id: str) -> str:
        data = self._request("DELETE", f"/notes/{note_id}")
        return str(data.get("message", ""))

    def health(self) -> bool:
        """Check if the API's store is reachable."""
        try:
            self._request("GET", "/health/db")
        except NotesApiError:
            return False
        return True


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP error! status: {response.status_code}"


# ---------------------------------------------------------------------------
# Local cache and view logic
# ---------------------------------------------------------------------------


class NoteCache:
    """Ordered local copy of the note list, newest first."""

    def __init__(self, notes: list[NoteData] | None = None):
        self._notes: list[NoteData] = list(notes or [])

    def replace(self, notes: list[NoteData]) -> None:
        self._notes = list(notes)

    def prepend(self, note: NoteData) -> None:
        self._notes.insert(0, note)

    def remove(self, note_id: str) -> None:
        self._notes = [n for n in self._notes if n["id"] != note_id]

    @property
    def is_empty(self) -> bool:
        return not self._notes

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[NoteData]:
        return iter(self._notes)


class NotesController:
    """
    Client-side behaviour of the notes view.

    Every action leaves the cache untouched on failure and records a
    user-visible message in ``error``.
    """

    def __init__(self, api: NotesApiClient, cache: NoteCache | None = None):
        self.api = api
        self.cache = cache if cache is not None else NoteCache()
        self.error: str | None = None
        self.loaded = False

    def load(self) -> bool:
        """Fetch the full list and replace the cache."""
        try:
            notes = self.api.list_notes()
        except NotesApiError as e:
            self.error = f"Failed to load notes. {e.message}"
            return False
        self.cache.replace(notes)
        self.loaded = True
        self.error = None
        return True

    def add(self, title: str, content: str) -> bool:
        """
        Create a note and prepend it to the cache.

        Returns:
            True when the input form should be cleared.
        """
        title, content = title.strip(), content.strip()
        if not title or not content:
            self.error = "Please fill in both title and content"
            return False
        try:
            note = self.api.create_note(title, content)
        except NotesApiError as e:
            self.error = f"Failed to add note. {e.message}"
            return False
        self.cache.prepend(note)
        self.error = None
        return True

    def delete(self, note_id: str, confirmed: bool) -> bool:
        """Delete a note; nothing is sent unless the user confirmed."""
        if not confirmed:
            return False
        try:
            self.api.delete_note(note_id)
        except NotesApiError as e:
            self.error = f"Failed to delete note. {e.message}"
            return False
        self.cache.remove(note_id)
        self.error = None
        return True


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def escape_text(text: str) -> str:
    """Escape user text before it goes into HTML markup."""
    return html.escape(text, quote=True)


def format_timestamp(value: str) -> str:
    """
    Format an ISO-8601 timestamp in the viewer's time zone and locale.

    Unparseable values are returned escaped but otherwise unchanged.
    """
    try:
        moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return escape_text(value)
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return f"{moment.strftime('%x')} {moment.strftime('%H:%M')}"


def render_note_html(note: NoteData) -> str:
    """Markup for one note card; all user-supplied text is escaped."""
    return (
        '<div class="note">'
        '<div class="note-header">'
        f'<h3 class="note-title">{escape_text(note["title"])}</h3>'
        f'<span class="note-date">{format_timestamp(note["created_at"])}</span>'
        "</div>"
        f'<div class="note-content">{escape_text(note["content"])}</div>'
        "</div>"
    )
