# app/main.py

import streamlit as st
from dotenv import load_dotenv
from ui.blog import blog_page
from ui.login import login_page, logout, restore_session
from ui.admin import dashboard_page


load_dotenv()


def admin_page():
    if not restore_session():
        login_page()
        return

    if st.sidebar.button("🔓 Logout"):
        logout()
        st.session_state["page"] = "blog"
        st.rerun()

    dashboard_page()


st.sidebar.markdown("## 📋 Menu")

if st.sidebar.button("📝 Blog"):
    st.session_state["page"] = "blog"
if st.sidebar.button("🛠️ Admin"):
    st.session_state["page"] = "admin"

page = st.session_state.get("page", "blog")
if page == "admin":
    admin_page()
else:
    blog_page()
