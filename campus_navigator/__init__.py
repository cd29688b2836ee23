"""Campus Navigator - Interactive campus map with walking directions.

Routes pedestrians between buildings and points of interest along the
campus path network:
- Routing graph built from GeoJSON LineString path geometry
- Nearest-node snapping of building centroids
- A* shortest-path search with a haversine heuristic
- Streamlit/Pydeck map showing buildings, paths and the active route

Modules:
    core: Foundation classes (geo calculations)
    model: Data structures (CampusFeature, FeatureCollection, RouteGraph, RouteResult)
    routing: Graph construction and path search (build_graph, a_star, find_route)
    ui: Streamlit interface components (navigation controller, map renderer)

Example:
    from campus_navigator.model import FeatureCollection
    from campus_navigator.routing import build_graph, find_route

    collection = FeatureCollection.load(path=CAMPUS_DATA_PATH)
    graph = build_graph(features=collection.features)
    outcome = find_route(start_feature=library, end_feature=cafeteria, graph=graph)
"""
