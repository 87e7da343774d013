"""go-xgettext - extract translatable strings from Go sources into .pot templates."""

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"
