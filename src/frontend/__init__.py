"""Flask JSON API over the key finder Engine (run with ``python -m frontend``)."""
