"""Auto-SEO command-line entry points."""
