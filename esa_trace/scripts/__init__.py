"""Command-line tools built on the ESA reader."""
