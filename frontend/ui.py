"""
Streamlit dev console for the tutor backend.

Two tabs: one posts a topic to /build-plan-spec and shows the course spec and
suggestions; the other edits a lesson, asks a question on /lesson-chat and
shows the answer next to the updated lesson.

    streamlit run frontend/ui.py
"""

import requests
import streamlit as st

from frontend.client import api_url, build_plan_spec, lesson_chat

st.set_page_config(page_title="Course Tutor console", layout="centered")
st.title("Course Tutor console")
st.caption(f"Backend: {api_url()}  (start it with `python -m app.app`)")

plan_tab, chat_tab = st.tabs(["Course plan", "Lesson chat"])


def _call(fn, *args):
    try:
        return fn(*args)
    except requests.exceptions.ConnectionError:
        st.error("Cannot reach the API. Start it with: python -m app.app")
        st.stop()


with plan_tab:
    topic = st.text_input("Topic", placeholder="e.g. Python para principiantes")
    if st.button("Build plan spec"):
        if not topic.strip():
            st.warning("Please enter a topic.")
        else:
            with st.spinner("Asking the model…"):
                status, data = _call(build_plan_spec, topic)
            if status != 200:
                st.error(f"{status}: {data.get('error', 'ERROR')}")
            else:
                st.subheader(data.get("title", ""))
                st.write(data.get("prompt", ""))
                st.markdown(f"**Level:** {data.get('level', '')}  ·  **Tags:** {', '.join(data.get('tags', []))}")

                suggestions = data.get("suggestions", [])
                if suggestions:
                    st.subheader("Suggestions")
                    rows = [
                        {
                            "Title": s.get("title", ""),
                            "Level": s.get("level", ""),
                            "Tags": ", ".join(s.get("tags", [])),
                        }
                        for s in suggestions
                    ]
                    st.dataframe(rows, use_container_width=True, hide_index=True)

with chat_tab:
    title = st.text_input("Lesson title", value="Variables en Python")
    summary = st.text_area("Summary", value="Qué es una variable y cómo se asigna.")
    content_md = st.text_area("Content (markdown)", height=200, value="# Variables\n\n`x = 1` asigna 1 a x.")
    tips = st.text_area("Tips (one per line)", value="Usa nombres descriptivos")
    mini_challenge = st.text_input("Mini challenge", value="")
    question = st.text_input("Question", placeholder="¿Puedo reasignar una variable?")

    if st.button("Ask"):
        lesson = {
            "title": title,
            "summary": summary,
            "contentMD": content_md,
            "tips": [t for t in tips.splitlines() if t.strip()],
            "miniChallenge": mini_challenge or None,
        }
        with st.spinner("Asking the tutor…"):
            status, data = _call(lesson_chat, question, lesson)
        if status != 200:
            st.error(f"{status}: {data.get('error', 'ERROR')}")
        else:
            st.subheader("Answer")
            st.markdown(data.get("answer", ""))
            updated = data.get("updatedLesson", {})
            if updated.get("contentMD") != content_md:
                st.subheader("Updated lesson")
                st.markdown(updated.get("contentMD", ""))
            else:
                st.info("Lesson unchanged.")
