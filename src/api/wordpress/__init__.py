"""WordPress bounded context.

Tracks remote mutations against managed WordPress sites and surfaces
concurrent edits of the same remote resource.
"""
