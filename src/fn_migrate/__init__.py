"""OpenFaaS function migration tool."""

__version__ = "1.0.0"

__all__ = [
    "cli",
    "client",
    "config",
    "gate",
    "logging_setup",
    "mirror",
    "models",
    "probe",
]
