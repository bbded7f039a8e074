"""Command-line interface for dubbo-config."""
