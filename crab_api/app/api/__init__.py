"""
API package containing the HTTP routes.

``router`` in ``router.py`` aggregates the resource routers defined in
``endpoints``; ``main.create_app`` includes it in the application.
"""
