"""WSGI entrypoint for the Recipe Rolodex application.

The Flask development server is intentionally not started from this module so
that deployments rely on Gunicorn (``gunicorn main:app``). Local development can
still use ``flask --app main run`` which imports the ``app`` object defined
below; ``RECIPE_STORE=memory`` runs without Firestore credentials.
"""

from rolodex import create_app

app = create_app()


__all__ = ["app"]
