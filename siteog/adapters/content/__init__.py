"""Post index adapters.

Read the site's content collections and normalize them into Post models.
"""
