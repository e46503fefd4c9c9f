# templates.py

"""Parsing of container template names."""

import re

from .exceptions import ValidationError
from .models import ParsedTemplate

# <os>-<os version>-<name>_<os version 2>_<arch><extension>
TEMPLATE_PATTERN = re.compile(
    r"^(?P<os>[^-]+)-(?P<os_version>[^-]+)-(?P<name>[^_]+)"
    r"_(?P<os_version2>[^_]+)_(?P<arch>[^._]+)(?P<extension>\..*)?$"
)

def parse_template(value: str) -> ParsedTemplate:
    """
    Parse a template file name into its components.

    Accepts a bare file name (``debian-10-standard_10.7-1_amd64.tar.gz``) or
    a volume id / path ending in one (``local:vztmpl/debian-10-...``).

    Raises ValidationError when the name does not follow the template
    naming scheme.
    """
    if not value:
        raise ValidationError("Empty template name")

    filename = value.rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    match = TEMPLATE_PATTERN.match(filename)
    if not match:
        raise ValidationError(f"No matches found from template: {value}")

    return ParsedTemplate(
        os=match.group("os"),
        os_version=match.group("os_version"),
        name=match.group("name"),
        os_version2=match.group("os_version2"),
        arch=match.group("arch"),
        extension=match.group("extension") or "",
    )
