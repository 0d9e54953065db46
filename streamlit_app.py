import logging

import streamlit as st

from musebot.config import load_settings
from musebot.controller import ExchangeController
from musebot.models import ChatSession, Role

logging.basicConfig(level=logging.INFO)

LABELS = {Role.USER: "You", Role.ASSISTANT: "Muse"}

settings = load_settings()

st.set_page_config(page_title="Literary Muse", page_icon="📖")
st.title("📖 Literary Muse")
st.markdown("*Where words dance and stories unfold*")
st.caption(f"Powered by {settings.model_id}")

# One session per browser tab, discarded when the tab goes away
if "session" not in st.session_state:
    st.session_state.session = ChatSession()
session = st.session_state.session

controller = ExchangeController.from_settings(session, settings)


def show_message(message):
    with st.chat_message(message.role.value):
        st.markdown(f"**{LABELS[message.role]}**")
        st.markdown(message.content)


def accept_prompt():
    # Runs before the script, so the input below is drawn disabled while the call is in flight
    controller.accept(st.session_state.prompt)


for message in session.messages:
    show_message(message)

# Enter sends, Shift+Enter adds a new line
st.chat_input(
    "Pen your thoughts here...",
    key="prompt",
    on_submit=accept_prompt,
    disabled=session.is_pending,
)
st.caption("Press Enter to send, Shift+Enter for new line")

if session.is_pending:
    with st.chat_message(Role.ASSISTANT.value):
        st.markdown(f"**{LABELS[Role.ASSISTANT]}**")
        with st.spinner("Composing thoughts..."):
            controller.settle()
    # Redraw with the reply in the transcript and the input enabled again
    st.rerun()

if session.is_empty:
    st.markdown("> *\"Every great story begins with a single word...\"*")
    st.caption("Start your literary journey by writing in the prompt box below")
