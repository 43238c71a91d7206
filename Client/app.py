import asyncio

import streamlit as st

from conversation.image_intake import MAX_IMAGES, ImageHandle
from conversation.orchestrator import ConversationOrchestrator
from conversation.query_clients import DemoImageQueryClient, HttpImageQueryClient
from conversation.settings import get_client_settings

settings = get_client_settings()

ERROR_REFRESH_SECONDS = 1.0


def build_orchestrator() -> ConversationOrchestrator:
    if settings.DEMO_MODE:
        query_client = DemoImageQueryClient()
    else:
        query_client = HttpImageQueryClient(
            base_url=settings.API_BASE_URL,
            path=settings.ANALYZE_IMAGES_PATH,
            timeout=settings.REQUEST_TIMEOUT_SECONDS
        )
    return ConversationOrchestrator(query_client, error_display_seconds=settings.ERROR_DISPLAY_SECONDS)


if "orchestrator" not in st.session_state:
    st.session_state.orchestrator = build_orchestrator()
    st.session_state.uploader_key = 0

orchestrator: ConversationOrchestrator = st.session_state.orchestrator

st.title("BatchQuery Image Analysis")
st.caption(f"Only {MAX_IMAGES} images can be used for comparison.")

for turn in orchestrator.transcript:
    with st.chat_message(turn.role):
        st.write(turn.text)

uploads = st.file_uploader(
    "Drag and Drop or Click to add Images",
    accept_multiple_files=True,
    key=f"uploader-{st.session_state.uploader_key}"
)
if uploads:
    orchestrator.add_images(
        ImageHandle(
            name=upload.name,
            byte_size=upload.size,
            # Streamlit does not expose the file mtime
            last_modified=0,
            mime_type=upload.type or "application/octet-stream",
            data=upload.getvalue()
        )
        for upload in uploads
    )
    st.session_state.uploader_key += 1
    st.rerun()

columns = st.columns(MAX_IMAGES)
for index, (image, preview) in enumerate(zip(orchestrator.images, orchestrator.previews)):
    with columns[index]:
        st.image(preview, caption=image.name)
        if st.button("Remove", key=f"remove-{index}"):
            orchestrator.remove_image(index)
            st.rerun()

# Re-rendered on a timer while an error is visible so it disappears on its own
@st.fragment(run_every=ERROR_REFRESH_SECONDS if orchestrator.error else None)
def error_banner():
    if orchestrator.error:
        st.error(orchestrator.error)


error_banner()

question = st.chat_input("Ask me anything", disabled=orchestrator.busy)
if question:
    asyncio.run(orchestrator.submit(question))
    st.rerun()
