"""HTTP facade for todo-flow.

Run with an ASGI server using the app factory, e.g. ``api.main:create_app``.
"""
