"""Font asset adapters: local font files and fonts served over HTTP."""
