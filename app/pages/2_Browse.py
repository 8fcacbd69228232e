"""
Browse & Search Page

Lists catalog items, or only those matching a keyword exactly
(name, category, image filename or id).
"""
import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import streamlit as st

from itemdb.api.catalog_api import CatalogAPI, CatalogAPIError

st.set_page_config(page_title="Browse & Search", page_icon="🔍", layout="wide")

st.title("Browse & Search")

api_url = st.sidebar.text_input(
    "Catalog API URL",
    value=os.environ.get("CATALOG_API_URL", "http://localhost:9000"),
)
n_columns = st.sidebar.slider("Columns", min_value=2, max_value=6, value=4)
api = CatalogAPI(api_url)


@st.cache_data
def load_image(base_url: str, image_filename: str) -> bytes:
    """Fetch image bytes once per filename; blobs never change."""
    return CatalogAPI(base_url).get_image(image_filename)


keyword = st.text_input("Keyword (exact match, leave empty to list all)")

try:
    if keyword:
        items = api.search(keyword)
    else:
        items = api.list_items()
except CatalogAPIError as e:
    st.error(f"Could not load items: {e}")
    st.stop()

if not items:
    st.info("No items found.")
    st.stop()

st.caption(f"{len(items)} item(s)")

for i in range(0, len(items), n_columns):
    cols = st.columns(n_columns)
    for j, col in enumerate(cols):
        if i + j < len(items):
            item = items[i + j]
            with col:
                try:
                    st.image(load_image(api_url, item["image"]), width="stretch")
                except CatalogAPIError:
                    st.text("[Image unavailable]")
                st.markdown(f"**{item['name'] or '(unnamed)'}**")
                st.caption(item["category"])

st.subheader("Items Table")
st.dataframe(items, width="stretch")
