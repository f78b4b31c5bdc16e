# app.py - AI Interior Designer: chat on the right, generated components on the left

import logging
from datetime import datetime

import streamlit as st

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler('interior_designer.log'),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)

# --- Component Imports ---
try:
    from designer.chat import QUICK_PROMPTS, ConversationFlow, latest_renderable_message
    from designer.component_registry import COMPONENT_REGISTRY, catalog_prompt
    from designer.gemini_handler import DesignThread, setup_gemini
    from designer.ui_components import release_stale_components
except ImportError as e:
    st.error(f"Failed to import a necessary component: {e}")
    logger.error(f"ImportError: {e}", exc_info=True)
    st.stop()


def load_css():
    """Reads the style.css file and injects it into the Streamlit app."""
    css_file_path = "assets/style.css"
    try:
        with open(css_file_path, "r") as f:
            css = f.read()
        st.markdown(f'<style>{css}</style>', unsafe_allow_html=True)
    except FileNotFoundError:
        logger.warning(f"Could not find style.css at '{css_file_path}'")


def init_session_state(model):
    if 'thread' not in st.session_state:
        st.session_state.thread = DesignThread(model, COMPONENT_REGISTRY)
    if 'flow' not in st.session_state:
        st.session_state.flow = ConversationFlow(st.session_state.thread)
    if 'pending_prompt' not in st.session_state:
        st.session_state.pending_prompt = None
    if 'chat_input' not in st.session_state:
        st.session_state.chat_input = ""


# ==================== INPUT HANDLING ====================
def _queue_prompt(text):
    st.session_state.pending_prompt = text


def _queue_typed_prompt():
    _queue_prompt(st.session_state.chat_input)
    st.session_state.chat_input = ""


def process_pending_prompt(flow: ConversationFlow):
    """Send a queued prompt before anything renders so the reply shows this run."""
    text = st.session_state.pending_prompt
    st.session_state.pending_prompt = None
    if text is None:
        return
    with st.spinner("Generating..."):
        accepted = flow.submit(text)
    if not accepted:
        st.toast("✍️ Please describe what you'd like to design first.")
    elif flow.thread.last_error:
        st.error(f"❌ {flow.thread.last_error}")


def create_input_form(form_key, disabled=False, placeholder="Describe components..."):
    with st.form(form_key, border=False):
        st.text_input("Your request", key="chat_input", placeholder=placeholder,
                      label_visibility="collapsed", disabled=disabled)
        st.form_submit_button("Send", on_click=_queue_typed_prompt, disabled=disabled,
                              use_container_width=True, type="primary")


def create_quick_prompts(columns=2, disabled=False, key_prefix="quick"):
    cols = st.columns(columns)
    for index, (label, prompt) in enumerate(QUICK_PROMPTS):
        with cols[index % columns]:
            st.button(label, key=f"{key_prefix}_{index}", on_click=_queue_prompt, args=(prompt,),
                      disabled=disabled, use_container_width=True, help=prompt)


# ==================== SCREENS ====================
def show_brief_screen(model_ready):
    st.markdown("""
    <div class="hero">
        <h1>🏠 AI Interior Designer</h1>
        <p>Describe the room you want. The designer answers with 3D rooms, budgets,
        color palettes and furniture picks you can explore and export.</p>
    </div>""", unsafe_allow_html=True)

    if not model_ready:
        st.error("GEMINI_API_KEY not found in Streamlit secrets or environment. "
                 "Add it to .streamlit/secrets.toml to start designing.")

    create_input_form("brief_form", disabled=not model_ready,
                      placeholder="e.g. A cozy Scandinavian bedroom under $2000")
    st.markdown("##### ✨ Or start from an idea")
    create_quick_prompts(columns=3, disabled=not model_ready, key_prefix="brief_quick")


def show_component_display(thread: DesignThread):
    latest = latest_renderable_message(thread.messages)

    header_col, status_col = st.columns([3, 1])
    with header_col:
        st.markdown("### 🏠 AI Interior Designer")
    with status_col:
        st.caption("Components loaded" if latest else "No components yet")

    if latest is None:
        st.markdown("""
        <div class="placeholder-box">
            <p>Use the chat panel to describe the room you want.
            Generated components render here in full page view.</p>
        </div>""", unsafe_allow_html=True)
        return

    # Keys follow the message position so each new reply gets fresh widget state
    message_index = next(i for i, m in enumerate(thread.messages) if m is latest)
    active_prefix = f"msg{message_index}_"
    release_stale_components(st.session_state, active_prefix)
    for index, component in enumerate(latest.rendered_components):
        entry = COMPONENT_REGISTRY[component.name]
        with st.container(border=True):
            entry.render(component.props, f"{active_prefix}{index}_{component.name}")


def show_chat_panel(thread: DesignThread, model_ready):
    st.markdown("#### 💬 Design Chat")
    st.caption("Describe your components")

    with st.container(height=460):
        if not thread.messages:
            st.caption("No messages yet")
        for message in thread.messages:
            with st.chat_message(message.role):
                text = message.message_text()
                st.markdown(text if text else "_(components only)_")
                if message.rendered_components:
                    names = ", ".join(c.name for c in message.rendered_components)
                    st.caption(f"🧩 {names}")

    create_input_form("chat_form", disabled=not model_ready)
    with st.expander("⚡ Quick prompts"):
        create_quick_prompts(columns=1, disabled=not model_ready, key_prefix="chat_quick")


def main():
    st.set_page_config(
        page_title="AI Interior Designer",
        page_icon="🏠",
        layout="wide",
        initial_sidebar_state="collapsed"
    )
    load_css()

    model = setup_gemini(catalog_prompt())
    init_session_state(model)
    thread = st.session_state.thread
    flow = st.session_state.flow

    if thread.model is None and model is not None:
        # key was added after the session started
        st.session_state.thread = thread = DesignThread(model, COMPONENT_REGISTRY)
        st.session_state.flow = flow = ConversationFlow(thread)
    model_ready = model is not None

    process_pending_prompt(flow)

    if flow.is_brief:
        show_brief_screen(model_ready)
    else:
        display_col, chat_col = st.columns([3, 2], gap="large")
        with display_col:
            show_component_display(thread)
        with chat_col:
            show_chat_panel(thread, model_ready)

    # --- Footer ---
    st.markdown(f"""
    <div class="custom-footer">
        <p>© {datetime.now().year} AI Interior Designer | Powered by Gemini</p>
    </div>""", unsafe_allow_html=True)


if __name__ == "__main__":
    main()
