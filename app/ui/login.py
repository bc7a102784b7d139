# app/ui/login.py

import os
import streamlit as st
from dotenv import load_dotenv
from streamlit_cookies_manager import EncryptedCookieManager
from services.api import login_user, get_user_info

load_dotenv()

COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD")

cookies = EncryptedCookieManager(prefix="portfolio-blog/", password=COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()


def logout():
    st.session_state.pop("access_token", None)
    st.session_state.pop("username", None)
    if "access_token" in cookies:
        del cookies["access_token"]
    if "username" in cookies:
        del cookies["username"]
    cookies.save()


def restore_session():
    """
    Reloads a remembered token from the cookie if the server still accepts it.
    """
    if "access_token" in st.session_state:
        return True
    token = cookies.get("access_token")
    if token and get_user_info(token):
        st.session_state["access_token"] = token
        st.session_state["username"] = cookies.get("username")
        return True
    return False


def login_page():
    st.title("🔐 Login")
    st.caption("Enter login details")

    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login")

    if submitted:
        with st.spinner("Logging in..."):
            result = login_user(username, password)
        if result.get("error"):
            st.error(f"❌ {result['error']}")
        else:
            st.session_state["access_token"] = result["token"]
            st.session_state["username"] = username
            cookies["access_token"] = result["token"]
            cookies["username"] = username
            cookies.save()
            st.rerun()
