"""Host status reporting for OSTree container-image deployments."""

__version__ = "0.1.0"
