"""HTTP adapters.

Serve the OG image routes over HTTP:
- GET /og/{slug} renders the card of a post
- GET /og/title/{title} renders the card of a literal title
- GET /health reports liveness
"""
