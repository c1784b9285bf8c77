"""Domain repositories (query and persistence helpers)."""
