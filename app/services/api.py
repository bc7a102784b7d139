# app/services/api.py

import os
import requests
from dotenv import load_dotenv


load_dotenv()

# Base URL of the FastAPI backend
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:4000").rstrip("/")
TIMEOUT = 10


def _auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def _error(res, fallback):
    try:
        message = res.json().get("message")
    except ValueError:
        message = None
    return {"error": message or f"{fallback} ({res.status_code})"}


# -------------------------------
# Authentication-related functions
# -------------------------------

def login_user(username, password):
    """
    Logs in the admin and returns {"token": ...} or {"error": ...}.
    """
    try:
        res = requests.post(
            f"{BACKEND_URL}/api/auth/login",
            json={"username": username, "password": password},
            timeout=TIMEOUT,
        )
    except requests.RequestException:
        return {"error": "Network error. Please try again later."}
    if res.status_code == 200:
        return res.json()
    return _error(res, "Login failed")


def get_user_info(token):
    """
    Retrieves the identity behind a token, or None if it is no longer valid.
    """
    try:
        res = requests.get(f"{BACKEND_URL}/api/auth/me", headers=_auth_headers(token), timeout=TIMEOUT)
    except requests.RequestException:
        return None
    return res.json() if res.status_code == 200 else None


# -------------------------
# Posts
# -------------------------

def list_posts():
    try:
        res = requests.get(f"{BACKEND_URL}/api/posts", timeout=TIMEOUT)
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code == 200:
        return res.json()
    return _error(res, "Failed to fetch posts")


def _send_post(method, url, token, fields, image):
    headers = _auth_headers(token)
    try:
        if image is not None:
            files = {"image": (image.name, image.getvalue(), image.type)}
            data = {k: v for k, v in fields.items() if v is not None}
            res = requests.request(method, url, data=data, files=files, headers=headers, timeout=TIMEOUT)
        else:
            res = requests.request(method, url, json=fields, headers=headers, timeout=TIMEOUT)
    except requests.RequestException as e:
        return {"error": str(e)}
    return res


def create_post(token, fields, image=None):
    """
    Creates a post. `image` is an optional Streamlit UploadedFile.
    """
    res = _send_post("POST", f"{BACKEND_URL}/api/posts", token, fields, image)
    if isinstance(res, dict):
        return res
    if res.status_code == 201:
        return res.json()
    return _error(res, "Create failed")


def update_post(token, post_id, fields, image=None):
    res = _send_post("PUT", f"{BACKEND_URL}/api/posts/{post_id}", token, fields, image)
    if isinstance(res, dict):
        return res
    if res.status_code == 200:
        return res.json()
    return _error(res, "Update failed")


def delete_post(token, post_id):
    try:
        res = requests.delete(f"{BACKEND_URL}/api/posts/{post_id}", headers=_auth_headers(token), timeout=TIMEOUT)
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code == 200:
        return res.json()
    return _error(res, "Delete failed")


def get_image_url(path):
    """
    Turns a stored image path into a URL the browser can load.
    """
    if not path:
        return None
    if path.startswith(("http://", "https://")):
        return path
    return f"{BACKEND_URL}{path}"
