"""Logging, metrics, tracing and request-id instrumentation for the rate desk."""
