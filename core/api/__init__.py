"""HTTP layer: route bindings, gates, feature routers and error handling."""
