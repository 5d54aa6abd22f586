"""threadlens: ranking, filtering and thread-aware search over video comments."""
