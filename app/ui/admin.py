# app/ui/admin.py

import os
import streamlit as st
from services.api import list_posts, create_post, update_post, delete_post
from ui.blog import CATEGORIES

DEFAULT_AUTHOR = os.getenv("BLOG_AUTHOR", "Admin")
REQUIRED_FIELDS = ("title", "category", "excerpt", "content")


def empty_form():
    return {
        "title": "",
        "date": "",
        "category": "",
        "excerpt": "",
        "content": "",
        "author": DEFAULT_AUTHOR,
    }


def dashboard_page():
    st.title("🛠️ Admin Dashboard")

    token = st.session_state["access_token"]

    if "post_form" not in st.session_state:
        st.session_state["post_form"] = empty_form()
        st.session_state["editing_id"] = None

    handle_post_form(token)

    posts = list_posts()
    if isinstance(posts, dict) and posts.get("error"):
        st.error(posts["error"])
        return

    handle_post_list(token, posts)


def reset_form():
    st.session_state["post_form"] = empty_form()
    st.session_state["editing_id"] = None


def handle_post_form(token):
    editing_id = st.session_state["editing_id"]
    form_data = st.session_state["post_form"]

    st.subheader("Edit Post" if editing_id else "Create New Post")

    options = [""] + CATEGORIES
    current_category = form_data.get("category") or ""
    if current_category not in options:
        options.append(current_category)

    with st.form("post_form", clear_on_submit=False):
        col1, col2 = st.columns(2)
        with col1:
            title = st.text_input("Title *", value=form_data.get("title") or "")
            category = st.selectbox(
                "Category *",
                options=options,
                index=options.index(current_category),
                format_func=lambda c: c or "Select category",
            )
        with col2:
            date = st.text_input("Date", value=form_data.get("date") or "", placeholder="Nov 23, 2025")
            author = st.text_input("Author", value=form_data.get("author") or "")
        excerpt = st.text_area("Excerpt *", value=form_data.get("excerpt") or "", height=80)
        content = st.text_area("Content *", value=form_data.get("content") or "", height=240)
        image = st.file_uploader("Image", type=["png", "jpg", "jpeg", "gif", "webp"])

        submitted = st.form_submit_button("Update Post" if editing_id else "Create Post")

    if editing_id and st.button("Cancel"):
        reset_form()
        st.rerun()

    if not submitted:
        return

    fields = {
        "title": title,
        "date": date,
        "category": category,
        "excerpt": excerpt,
        "content": content,
        "author": author,
    }
    if any(not fields[name].strip() for name in REQUIRED_FIELDS):
        st.warning("Please fill in all fields")
        return

    if editing_id:
        result = update_post(token, editing_id, fields, image)
    else:
        result = create_post(token, fields, image)

    if isinstance(result, dict) and result.get("error"):
        st.error(result["error"])
        return

    st.success("✅ Post saved")
    reset_form()
    st.rerun()


def handle_post_list(token, posts):
    st.subheader(f"Posts ({len(posts)})")

    if not posts:
        st.info("No posts yet. Create your first post above!")
        return

    for post in posts:
        with st.container(border=True):
            col1, col2, col3 = st.columns([8, 1, 1])
            with col1:
                st.caption(f"{post.get('category') or ''} · {post.get('date') or ''}")
                st.markdown(f"**{post['title']}**")
                st.write(post.get("excerpt") or "")
            with col2:
                if st.button("✏️", key=f"edit-{post['id']}"):
                    st.session_state["post_form"] = {k: post.get(k) for k in empty_form()}
                    st.session_state["editing_id"] = post["id"]
                    st.rerun()
            with col3:
                if st.button("🗑️", key=f"delete-{post['id']}"):
                    st.session_state["confirm_delete"] = post["id"]

            if st.session_state.get("confirm_delete") == post["id"]:
                st.warning("Are you sure you want to delete this post?")
                if st.button("Delete", key=f"confirm-delete-{post['id']}"):
                    result = delete_post(token, post["id"])
                    st.session_state.pop("confirm_delete", None)
                    if isinstance(result, dict) and result.get("error"):
                        st.error(result["error"])
                    else:
                        if st.session_state.get("editing_id") == post["id"]:
                            reset_form()
                        st.rerun()
                if st.button("Keep", key=f"cancel-delete-{post['id']}"):
                    st.session_state.pop("confirm_delete", None)
                    st.rerun()
