"""
Streamlit Chat Front End for Warung Ledger

A local stand-in for the messaging channel: the stall owner (or a
developer) types commands into a chat box exactly as they would in the
messenger, and the bot's replies show up underneath.

DESIGN PRINCIPLES:
1. Same dispatcher as production - only the channel differs
2. Each sidebar conversation id is its own ledger owner
3. Ordinary chat (no command prefix) gets no reply, just like the real bot
"""

import asyncio

import streamlit as st

from warung_ledger.config import get_settings
from warung_ledger.orchestrator import MessageDispatcher, create_app_components
from warung_ledger.services.channel import InboundMessage, MessageChannel, MessageKind


# Page configuration
st.set_page_config(
    page_title="Warung Ledger",
    page_icon="🐟",
    layout="centered",
    initial_sidebar_state="expanded",
)


class StreamlitChannel(MessageChannel):
    """Channel that delivers replies into the Streamlit session history."""

    async def send_text(self, conversation_id: str, text: str) -> None:
        history = st.session_state.setdefault("history", {})
        history.setdefault(conversation_id, []).append(
            {"role": "assistant", "content": text}
        )


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_dispatcher() -> MessageDispatcher:
    """Get or create the dispatcher (cached for the server's lifetime)."""
    return create_app_components(StreamlitChannel())


def main():
    """Main application entry point."""
    dispatcher = get_dispatcher()
    app_settings = get_settings().app
    prefix = app_settings.command_prefix

    st.sidebar.title(f"🐟 {app_settings.business_name}")
    st.sidebar.markdown("---")

    conversation_id = st.sidebar.text_input(
        "Conversation (phone number)",
        value="6281234567890",
        help="Every conversation keeps its own ledger",
    ).strip()

    as_caption = st.sidebar.checkbox(
        "Send as photo caption",
        value=False,
        help="Simulates a photo with the command typed in its caption",
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        f"""
        **Try:**
        - `{prefix}help`
        - `{prefix}income lele-bakar 12000 2`
        - `{prefix}expense gas 25000`
        - `{prefix}profit`
        - `{prefix}report weekly`
        """
    )

    st.title("💬 Warung Ledger")

    if not conversation_id:
        st.warning("Enter a conversation id in the sidebar to start.")
        st.stop()

    history = st.session_state.setdefault("history", {})
    messages = history.setdefault(conversation_id, [])

    for message in messages:
        with st.chat_message(message["role"]):
            st.text(message["content"])

    text = st.chat_input(f"Type a command, e.g. {prefix}help")
    if not text:
        return

    messages.append({"role": "user", "content": text})

    if as_caption:
        inbound = InboundMessage(
            conversation_id=conversation_id,
            kind=MessageKind.CAPTIONED_MEDIA,
            caption=text,
        )
    else:
        inbound = InboundMessage(
            conversation_id=conversation_id,
            kind=MessageKind.PLAIN_TEXT,
            text=text,
        )

    # Ordinary chat gets no reply; the user line stays in the history
    run_async(dispatcher.handle(inbound))
    st.rerun()


if __name__ == "__main__":
    main()
