"""Application descriptor model, validation, and loaders.

Usage::

    from phpdock.descriptors import load_descriptors, validate_descriptors

    descriptors = load_descriptors("apps.yaml")
    validate_descriptors(descriptors)
"""

from phpdock.descriptors.loader import (
    descriptor_from_record,
    load_descriptors,
    parse_app_flag,
)
from phpdock.descriptors.models import CONTAINER_WEB_ROOT, ApplicationDescriptor
from phpdock.descriptors.validation import check_relative_path, validate_descriptors

__all__ = [
    "ApplicationDescriptor",
    "CONTAINER_WEB_ROOT",
    "check_relative_path",
    "descriptor_from_record",
    "load_descriptors",
    "parse_app_flag",
    "validate_descriptors",
]
