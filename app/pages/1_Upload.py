"""
Upload Items Page

Adds items to the catalog through the catalog server.
"""
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import streamlit as st

from itemdb.api.catalog_api import CatalogAPI, CatalogAPIError

st.set_page_config(page_title="Upload Items", page_icon="📤", layout="wide")

st.title("Upload Items")

api_url = st.sidebar.text_input(
    "Catalog API URL",
    value=os.environ.get("CATALOG_API_URL", "http://localhost:9000"),
)
api = CatalogAPI(api_url)

with st.form("add_item", clear_on_submit=True):
    name = st.text_input("Name")
    category = st.text_input("Category")
    uploaded_file = st.file_uploader("Image", type=["jpg", "jpeg"])
    submitted = st.form_submit_button("Add item")

if submitted:
    if uploaded_file is None:
        st.error("Choose an image to upload.")
        st.stop()

    try:
        with st.spinner("Uploading..."):
            item = api.add_item_from_bytes(
                name,
                category,
                uploaded_file.getvalue(),
                uploaded_file.name,
            )
    except CatalogAPIError as e:
        st.error(f"Could not add item: {e}")
        st.stop()

    st.success(f"Added {item['name'] or '(unnamed)'} to {item['category'] or '(no category)'}")

    col1, col2 = st.columns([1, 2])
    with col1:
        st.image(uploaded_file.getvalue(), width="stretch")
    with col2:
        st.markdown(f"**Name:** {item['name']}")
        st.markdown(f"**Category:** {item['category']}")
        st.markdown(f"**Stored as:** `{item['image']}`")
