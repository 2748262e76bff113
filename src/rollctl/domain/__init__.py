"""Domain layer — statuses, models, guards, and reductions.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
Every function here is pure: no I/O, no logging, no shared state.
"""
