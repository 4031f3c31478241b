"""phpdock: scaffold Nginx + PHP-FPM development environments for Docker Compose."""

__version__ = "0.1.0"
