"""
Item Catalog - Streamlit App

Root page providing navigation and service status.
"""
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import streamlit as st
from itemdb.api.catalog_api import CatalogAPI, CatalogAPIError

# Configuration
API_URL = os.environ.get("CATALOG_API_URL", "http://localhost:9000")

st.set_page_config(
    page_title="Item Catalog",
    page_icon="🛍️",
    layout="wide"
)

st.title("Item Catalog")

st.markdown("""
Welcome to the Item Catalog. This application allows you to:

- **Upload Items**: Add an item with a category and an image
- **Browse & Search**: List every item or find items by exact keyword

Use the sidebar to navigate between pages.
""")

# Display service status
st.header("Service Status")

api = CatalogAPI(API_URL)
col1, col2 = st.columns(2)

with col1:
    st.subheader("Catalog Server")
    if api.health_check():
        st.success(f"Connected: {API_URL}")
    else:
        st.error(f"Catalog server is not reachable at {API_URL}")

with col2:
    st.subheader("Items")
    try:
        st.metric("Total Items", len(api.list_items()))
    except CatalogAPIError as e:
        st.error(f"Could not list items: {e}")

# Configuration info
st.header("Configuration")
st.markdown("""
**Environment Variables:**
- `CATALOG_API_URL`: URL of the catalog server (default: http://localhost:9000)
""")
