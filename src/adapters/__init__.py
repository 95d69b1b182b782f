"""I/O adapters: HTTP client, favorites store and exporters."""
