"""Runtime services: configuration and telemetry."""
