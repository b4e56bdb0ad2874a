"""Analysis application services (traversal, profiling, graph building)."""
