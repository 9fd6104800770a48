"""Policy types, request adapter and TOML option profiles."""
