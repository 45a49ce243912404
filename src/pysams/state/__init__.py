"""State layer.

This package is the single source of truth for how status arriving from
the push channel, snapshot fetches and local operator actions is merged
into the canonical client state.
"""
