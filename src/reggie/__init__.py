"""Reggie: REST sidecar for publishing typed messages to Pub/Sub and storing
scenario / message-sample documents in Cloud Storage."""

__version__ = "0.0.1"
