# app/ui/blog.py

import streamlit as st
from services.api import list_posts, get_image_url


CATEGORIES = ["React", "CSS", "3D Graphics", "Backend", "Database", "DevOps", "Other"]

# Shown when the backend cannot be reached
DEFAULT_POSTS = [
    {
        "id": 1,
        "title": "Getting Started with React",
        "date": "Nov 15, 2025",
        "category": "React",
        "image": None,
        "excerpt": "Learn the fundamentals of React and how to build your first component.",
        "content": "React is a library for building user interfaces out of reusable components. "
                   "This guide walks through components, state, props and hooks.",
        "author": "Admin",
    },
    {
        "id": 2,
        "title": "3D Web Development with Three.js",
        "date": "Nov 5, 2025",
        "category": "3D Graphics",
        "image": None,
        "excerpt": "Bring your web projects to life with 3D graphics.",
        "content": "Three.js makes 3D on the web accessible. Learn how to build scenes, "
                   "add lighting and textures, and animate objects.",
        "author": "Admin",
    },
]


def filter_posts(posts, category):
    if category == "All":
        return posts
    return [p for p in posts if p.get("category") == category]


def blog_page():
    st.title("📝 Blog")
    st.caption("Insights, tutorials, and stories about web development")

    posts = list_posts()
    if isinstance(posts, dict) and posts.get("error"):
        st.info("Showing sample posts while the blog server is unreachable.")
        posts = DEFAULT_POSTS

    selected = st.session_state.get("selected_post")
    if selected:
        show_post(selected)
        return

    category = st.radio("Filter by Category", options=["All"] + CATEGORIES, horizontal=True)
    filtered = filter_posts(posts, category)

    if not filtered:
        st.info("No posts found in this category.")
        return

    cols = st.columns(3)
    for i, post in enumerate(filtered):
        with cols[i % 3]:
            with st.container(border=True):
                st.caption(f"{post.get('category') or ''} · {post.get('date') or ''}")
                image_url = get_image_url(post.get("image"))
                if image_url:
                    st.image(image_url, use_container_width=True)
                st.subheader(post["title"])
                st.write(post.get("excerpt") or "")
                if st.button("Read More →", key=f"read-{post['id']}"):
                    st.session_state["selected_post"] = post
                    st.rerun()


def show_post(post):
    if st.button("← Back to All Posts"):
        st.session_state.pop("selected_post", None)
        st.rerun()

    st.caption(f"{post.get('category') or ''} · {post.get('date') or ''}")
    st.header(post["title"])
    st.write(f"By {post.get('author') or 'Unknown'}")
    image_url = get_image_url(post.get("image"))
    if image_url:
        st.image(image_url)
    st.markdown(post.get("content") or "")
