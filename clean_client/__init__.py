"""Client-side application core: session lifecycle, repositories and caching."""
