"""
Notes Frontend

Streamlit single-page view for the notes API: list, create and delete
notes. Keeps a local copy of the list in session state and patches it
from API responses.

Run locally:
    streamlit run ui/main.py

Requires the ui extra:
    pip install -e ".[ui]"
"""

from __future__ import annotations

import locale
import logging
import os

import streamlit as st

from notes_service.client import (
    NoteCache,
    NoteData,
    NotesApiClient,
    NotesController,
    render_note_html,
)

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

API_URL = os.getenv("API_URL", "http://localhost:5000")
API_PREFIX = os.getenv("API_PREFIX", "/api")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10.0"))

logger = logging.getLogger(__name__)

# Date formatting follows the locale the UI process runs under
try:
    locale.setlocale(locale.LC_TIME, "")
except locale.Error as e:
    logger.debug("Could not apply the system LC_TIME locale: %s", e)


# ---------------------------------------------------------------------------
# Page Configuration
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Notes",
    page_icon="📝",
    layout="centered",
)

st.markdown(
    """
    <style>
    .note {
        background: #F8FAFC;
        border-left: 3px solid #3B82F6;
        padding: 0.75rem 1rem;
        margin: 0.5rem 0;
        border-radius: 0 0.5rem 0.5rem 0;
    }
    .note-header {
        display: flex;
        justify-content: space-between;
        align-items: baseline;
    }
    .note-title {
        font-size: 1.1rem;
        margin: 0;
        color: #1E3A5F;
    }
    .note-date {
        color: #6B7280;
        font-size: 0.85rem;
    }
    .note-content {
        color: #374151;
        white-space: pre-wrap;
        margin-top: 0.5rem;
    }
    .empty-state {
        text-align: center;
        color: #6B7280;
        padding: 2rem 0;
    }
    </style>
    """,
    unsafe_allow_html=True,
)


# ---------------------------------------------------------------------------
# Session State Initialization
# ---------------------------------------------------------------------------


def init_session_state() -> None:
    """Initialize session state variables."""
    if "controller" not in st.session_state:
        api = NotesApiClient(f"{API_URL}{API_PREFIX}", timeout=API_TIMEOUT)
        st.session_state.controller = NotesController(api, NoteCache())
    if "pending_delete" not in st.session_state:
        st.session_state.pending_delete = None  # note id awaiting confirmation
    if "form_version" not in st.session_state:
        st.session_state.form_version = 0  # bumped to clear the input widgets


init_session_state()


def get_controller() -> NotesController:
    controller: NotesController = st.session_state.controller
    return controller


# ---------------------------------------------------------------------------
# UI Components
# ---------------------------------------------------------------------------


def render_form() -> None:
    """Render the create-note form."""
    controller = get_controller()
    version = st.session_state.form_version

    title = st.text_input("Title", key=f"note_title_{version}")
    content = st.text_area("Content", key=f"note_content_{version}")

    if st.button("Add Note", type="primary", use_container_width=True):
        if controller.add(title, content):
            # New widget keys render empty inputs
            st.session_state.form_version += 1
            st.rerun()
        elif controller.error:
            # Reported inline; the banner below is for load and delete failures
            st.warning(controller.error)
            controller.error = None


def render_delete_confirmation(note: NoteData) -> None:
    """Ask for explicit confirmation before deleting a note."""
    controller = get_controller()
    st.warning("Are you sure you want to delete this note?")
    confirm_col, cancel_col = st.columns(2)
    if confirm_col.button("Confirm", key=f"confirm_{note['id']}"):
        controller.delete(note["id"], confirmed=True)
        st.session_state.pending_delete = None
        st.rerun()
    if cancel_col.button("Cancel", key=f"cancel_{note['id']}"):
        st.session_state.pending_delete = None
        st.rerun()


def render_notes() -> None:
    """Render the note list from the local cache."""
    controller = get_controller()

    if controller.cache.is_empty:
        st.markdown(
            '<div class="empty-state"><h3>No notes yet</h3>'
            "<p>Create your first note above!</p></div>",
            unsafe_allow_html=True,
        )
        return

    for note in controller.cache:
        st.markdown(render_note_html(note), unsafe_allow_html=True)
        if st.session_state.pending_delete == note["id"]:
            render_delete_confirmation(note)
        elif st.button("Delete", key=f"delete_{note['id']}"):
            st.session_state.pending_delete = note["id"]
            st.rerun()


def render_error() -> None:
    """Show the last failure with a retry affordance."""
    controller = get_controller()
    st.error(controller.error)
    if st.button("Try Again"):
        with st.spinner("Loading notes..."):
            controller.load()
        st.rerun()


# ---------------------------------------------------------------------------
# Main Entry Point
# ---------------------------------------------------------------------------


def main() -> None:
    """Main application entry point."""
    controller = get_controller()

    st.title("📝 Notes")

    if not controller.loaded and controller.error is None:
        with st.spinner("Loading notes..."):
            controller.load()

    render_form()
    st.divider()

    if controller.error:
        render_error()
    if controller.loaded:
        render_notes()


if __name__ == "__main__":
    main()
