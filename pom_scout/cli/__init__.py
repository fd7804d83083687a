"""Command line interface for pom-scout."""
