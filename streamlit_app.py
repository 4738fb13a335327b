from __future__ import annotations

import os
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if SRC.exists() and str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import streamlit as st

import ai_heads
from ai_heads.app.pages import landing, login, projects
from ai_heads.data.db import connect, default_db_path, init_db
from ai_heads.data.seed import ensure_seed_data
from ai_heads.data.storage import KeyValueStore, SqliteProjectStore
from ai_heads.services.auth import clear_user, get_user

st.set_page_config(page_title="AI Heads Command Centre", layout="wide")

# --- DB init (once per app start) ---
con = connect(default_db_path())
init_db(con)
ensure_seed_data(SqliteProjectStore(con))
kv = KeyValueStore(con)

user = get_user(kv)
if user is None:
    login.render(con)
    st.stop()

# --- Sidebar navigation ---
st.sidebar.title("AI Heads Command Centre")
st.sidebar.markdown(f"Logged in as **{user['name']}**")
if st.sidebar.button("Logout"):
    clear_user(kv)
    st.rerun()

build_number = (
    os.getenv("APP_BUILD")
    or os.getenv("BUILD_NUMBER")
    or ai_heads.__version__
)
st.sidebar.caption(f"Build: {build_number}")

PAGES = {
    "Scoreboard": lambda: landing.render(con),
    "Projects": lambda: projects.render(con),
}

selected = st.sidebar.radio("Pages", list(PAGES.keys()), index=0, key="sidebar_page")

# --- Render selected page ---
PAGES[selected]()
