from __future__ import annotations

import sqlite3

import streamlit as st

from ai_heads.data.storage import KeyValueStore
from ai_heads.services.auth import set_user


def render(con: sqlite3.Connection) -> None:
    st.title("AI Heads Login")
    kv = KeyValueStore(con)

    with st.form("login_form"):
        name = st.text_input("Name", placeholder="Enter name")
        submitted = st.form_submit_button("Enter")

    if submitted:
        if set_user(kv, name):
            st.rerun()
        else:
            st.error("Name is required.")
