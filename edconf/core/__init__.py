"""edconf Core - Shared constants and validators.

Import specific names from submodules:
    from edconf.core.constants import ConfigKey, ErrorCode
    from edconf.core.validators import ValidationError, validate_config
"""

from edconf.core import constants, validators

__all__ = [
    "constants",
    "validators",
]
