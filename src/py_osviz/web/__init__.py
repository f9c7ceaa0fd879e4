"""Browser-facing JSON API for the visualiser.

This package provides a Flask application that exposes both simulation
engines over HTTP.  It is an **optional** extra — install with::

    pip install py-osviz[web]

The ``create_app`` factory in ``app.py`` builds one page replacement
engine and one disk scheduling engine and serves their snapshots,
single steps, and resets.  Auto-play stays in the browser: it calls the
step endpoint on its own timer.
"""
