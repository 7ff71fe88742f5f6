"""Core library: roots, overlay views, host filesystem, configuration."""
