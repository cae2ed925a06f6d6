# stores/session_state_store.py
import streamlit as st
from dataclasses import dataclass, field
from typing import Dict, List


SESSION_KEYS = {
    "platform_id": "platform_id",
    "chat_messages": "chat_messages",
    "icon_url": "icon_url",
}

@dataclass
class SessionState:
    platform_id: str = ""
    chat_messages: List[Dict[str, str]] = field(default_factory=list)
    icon_url: str = ""


class SessionStateStore:
    def get(self) -> SessionState:
        return SessionState(
            platform_id=st.session_state.get(SESSION_KEYS["platform_id"], ""),
            chat_messages=st.session_state.get(SESSION_KEYS["chat_messages"], []),
            icon_url=st.session_state.get(SESSION_KEYS["icon_url"], ""),
        )

    def set(self, state: SessionState) -> None:
        st.session_state[SESSION_KEYS["platform_id"]] = state.platform_id
        st.session_state[SESSION_KEYS["chat_messages"]] = state.chat_messages
        st.session_state[SESSION_KEYS["icon_url"]] = state.icon_url
