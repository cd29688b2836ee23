"""Campus Navigator - Interactive campus map with walking directions.

Pick a start and a destination building; the route is computed on the
campus path network and drawn on a 3D map.

Run: streamlit run campus_navigator/app.py
"""

import logging
import traceback

import streamlit as st

from campus_navigator.constants import CAMPUS_DATA_PATH, AppConfig
from campus_navigator.model.feature import FeatureCollection, InvalidFeatureCollectionError
from campus_navigator.model.message import (
    CampusContextMessage,
    FileLoadErrorMessage,
    RouteBannerMessage,
)
from campus_navigator.ui.center_map import CampusMapRenderer
from campus_navigator.ui.navigation import NavigationController

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def load_initial_collection() -> FeatureCollection:
    """Load the campus document from disk, empty collection if unavailable."""
    if not CAMPUS_DATA_PATH.exists():
        logger.warning(f"Campus data not found at {CAMPUS_DATA_PATH}, starting empty")
        return FeatureCollection()
    try:
        return FeatureCollection.load(path=CAMPUS_DATA_PATH)
    except (OSError, InvalidFeatureCollectionError) as e:
        logger.error(f"Failed to load campus data: {e}")
        FileLoadErrorMessage(error=str(e)).display()
        return FeatureCollection()


def init_session_state() -> None:
    """Initialize session state with campus data, navigation and renderer."""
    if "navigation" not in st.session_state:
        st.session_state.navigation = NavigationController(collection=load_initial_collection())

    if "map_renderer" not in st.session_state:
        st.session_state.map_renderer = CampusMapRenderer()

    if "_upload_counter" not in st.session_state:
        st.session_state._upload_counter = 0


def reset_ui_state() -> None:
    """Reset navigation while preserving the loaded campus data."""
    logger.info("Resetting UI state due to error recovery")
    st.session_state.navigation.reset()
    st.session_state.map_renderer = CampusMapRenderer()


# =============================================================================
# SIDEBAR
# =============================================================================


def _handle_upload(navigation: NavigationController) -> None:
    """Replace campus data from an uploaded GeoJSON file."""
    uploaded = st.file_uploader(
        "Load campus GeoJSON",
        type=["json", "geojson"],
        key=f"campus_upload_{st.session_state._upload_counter}",
    )
    if uploaded is None:
        return
    try:
        collection = FeatureCollection.from_json(content=uploaded.getvalue(), source=uploaded.name)
    except InvalidFeatureCollectionError as e:
        FileLoadErrorMessage(error=str(e)).display()
        return
    navigation.set_collection(collection=collection)
    navigation.reset()
    st.session_state._upload_counter += 1
    logger.info(f"Uploaded campus data: {len(collection)} features")
    st.rerun()


def render_sidebar(navigation: NavigationController, renderer: CampusMapRenderer) -> None:
    """Start/destination selectors and navigation buttons."""
    locations = navigation.collection.locations()
    options = [""] + [f.id for f in locations]
    labels = {f.id: f.display_name for f in locations}

    with st.sidebar:
        graph = navigation.graph
        CampusContextMessage(
            location_count=len(locations),
            node_count=len(graph) if graph else 0,
            edge_count=graph.edge_count if graph else 0,
        ).display()

        start_id = st.selectbox(
            "Start",
            options,
            index=options.index(navigation.selection.start_id) if navigation.selection.start_id in options else 0,
            format_func=lambda fid: labels.get(fid, "Select start..."),
        )
        end_id = st.selectbox(
            "Destination",
            options,
            index=options.index(navigation.selection.end_id) if navigation.selection.end_id in options else 0,
            format_func=lambda fid: labels.get(fid, "Select destination..."),
        )
        navigation.select_start(feature_id=start_id)
        navigation.select_end(feature_id=end_id)

        col_go, col_reset = st.columns(2)
        if col_go.button("🧭 Navigate", key="btn_navigate", type="primary", use_container_width=True):
            toast = navigation.start_navigation()
            toast.display()
            if navigation.route is not None:
                renderer.fit_route(route=navigation.route)
        if col_reset.button("Reset", key="btn_reset", use_container_width=True):
            navigation.reset()
            st.rerun()

        st.divider()
        _handle_upload(navigation=navigation)


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    init_session_state()

    st.title(AppConfig.TITLE)

    try:
        _run_app_ui()
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        logger.error(f"[UI] UI error caught: {error_msg}\n{traceback.format_exc()}")
        st.error(f"⚠️ [UI] Something went wrong: {error_msg}")
        reset_ui_state()
        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


def _run_app_ui() -> None:
    """Run the main application UI. Separated for error handling wrapper."""
    navigation: NavigationController = st.session_state.navigation
    renderer: CampusMapRenderer = st.session_state.map_renderer
    renderer.collection = navigation.collection

    render_sidebar(navigation=navigation, renderer=renderer)

    if navigation.route is not None:
        RouteBannerMessage(route=navigation.route).display()

    highlight_ids = [fid for fid in (navigation.selection.start_id, navigation.selection.end_id) if fid]
    deck = renderer.render(route=navigation.route, highlight_ids=highlight_ids)
    st.pydeck_chart(deck, use_container_width=True)


if __name__ == "__main__":
    main()
