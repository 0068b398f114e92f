"""Shared utilities: request principal context and telemetry."""
