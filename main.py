# main.py
import json

import streamlit as st

from application.icon_service import icon_name, select_icon
from application.model_service import ModelService
from config.constant import APP_TITLE, PROVIDER_OPTIONS
from config.logging import logger
from config.settings import settings
from domain.models import (
    AzureOpenAIProviderSettings,
    CopilotSettings,
    OpenAIProviderSettings,
    Platform,
    ProviderKind,
)
from domain.ports import ChatMessage, PlatformNotFoundError
from infra.db.platform_repo import JsonPlatformRepository
from infra.providers.base import ProviderConfigError
from stores.session_state_store import SessionState, SessionStateStore

# ============== Page & header ==============
st.set_page_config(page_title=APP_TITLE, page_icon="🧭", layout="wide")
st.title("🧭 " + APP_TITLE)
st.caption("Configure a platform's copilot provider and try the flow icon picker.")

repo = JsonPlatformRepository(settings.PLATFORMS_FILE)
model_service = ModelService(repo)
store = SessionStateStore()
state: SessionState = store.get()

# ============== Sidebar ==============
with st.sidebar:
    settings_tab, info_tab = st.tabs(["⚙️ Settings", "ℹ️ Info"])
    with settings_tab:
        platform_id = st.text_input("Platform ID", value=state.platform_id, placeholder="e.g. platform-1")
        if platform_id != state.platform_id:
            state.platform_id = platform_id
            state.chat_messages = []
            state.icon_url = ""
            store.set(state)

        platform = None
        platforms_readable = True
        if platform_id:
            try:
                platform = repo.get_one_or_throw(platform_id)
            except PlatformNotFoundError:
                platform = None
            except (ValueError, KeyError, TypeError) as e:
                platforms_readable = False
                logger.exception(f"[console] Cannot read {settings.PLATFORMS_FILE}: {e}")
                st.error(f"Cannot read platforms file {settings.PLATFORMS_FILE}: {e}")
        providers = platform.copilot_settings.providers if platform and platform.copilot_settings else {}
        openai_cfg = providers.get(ProviderKind.OPENAI) or OpenAIProviderSettings()
        azure_cfg = providers.get(ProviderKind.AZURE_OPENAI) or AzureOpenAIProviderSettings()

        provider = st.selectbox("Provider", PROVIDER_OPTIONS, index=0)
        if provider == "OpenAI":
            openai_key = st.text_input("OpenAI API Key", type="password", value=openai_cfg.api_key)
            openai_cfg = OpenAIProviderSettings(api_key=openai_key)
        else:
            azure_key = st.text_input("Azure API Key", type="password", value=azure_cfg.api_key)
            resource_name = st.text_input("Resource name", value=azure_cfg.resource_name,
                                          placeholder="<resource>.openai.azure.com")
            deployment_name = st.text_input("Deployment name", value=azure_cfg.deployment_name,
                                            placeholder="e.g. gpt-4o-deploy")
            azure_cfg = AzureOpenAIProviderSettings(
                api_key=azure_key, resource_name=resource_name, deployment_name=deployment_name
            )

        if st.button("💾 Save", use_container_width=True, disabled=not (platform_id and platforms_readable)):
            repo.save(Platform(
                id=platform_id,
                name=platform.name if platform else platform_id,
                copilot_settings=CopilotSettings(providers={
                    ProviderKind.OPENAI: openai_cfg,
                    ProviderKind.AZURE_OPENAI: azure_cfg,
                }),
            ))
            logger.info(f"[console] Saved copilot settings for platform {platform_id}")
            st.success("Saved.")

    with info_tab:
        st.markdown("- OpenAI is used when its API key is set; otherwise Azure OpenAI.")
        st.markdown(f"- Platforms are stored in `{settings.PLATFORMS_FILE}`.")

# ============== Icon picker ==============
with st.container(border=True):
    if state.icon_url:
        st.image(state.icon_url, width=64)
        st.caption(icon_name(state.icon_url))
    else:
        st.caption("The selected icon will show up here.")

for msg in state.chat_messages:
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])

prompt = st.chat_input("Describe the automation…", disabled=not state.platform_id)
if prompt:
    with st.chat_message("user"):
        st.markdown(prompt)

    with st.chat_message("assistant"):
        try:
            handle = model_service.resolve(state.platform_id)
        except ProviderConfigError as e:
            st.error(e.message)
            st.stop()

        with st.spinner("Picking an icon…"):
            history = [ChatMessage(m["role"], m["content"]) for m in state.chat_messages]
            url = select_icon(handle, prompt, history)

        if url:
            reply = json.dumps({"icon": icon_name(url)})
            state.icon_url = url
        else:
            reply = "No matching icon found."
        st.markdown(reply)
        logger.info(f"[console] Icon reply: {reply}")

    state.chat_messages.append({"role": "user", "content": prompt})
    state.chat_messages.append({"role": "assistant", "content": reply})
    store.set(state)
    st.rerun()
