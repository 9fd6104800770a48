"""
Adapter for options that arrive on a generic request object.

Transport layers hand over loosely typed values (``"true"``, ``"3"``) keyed by
either plain strings or ``FilesetOption`` members. The adapter normalizes them
into an ordinary mapping so that direct construction and request-driven
construction share the same setters and validation.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from filesets.logging_setup import get_logger
from .settings import OPTION_KEY_ALIASES, REQUEST_OPTION_KEYS, FilesetOption

log = get_logger(__name__)

_ALL_DIGITS = re.compile(r"^\d+$")

@dataclass
class OptionsRequest:
    # minimal stand-in for a transport request: a key plus its options.
    key: Optional[str] = None
    options: Mapping[Any, Any] = field(default_factory=dict)

def _lookup(options: Mapping[Any, Any], option: FilesetOption) -> Any:
    # uses 'in' rather than .get() so that False values are still found.
    if option in options:
        return options[option]
    for key in (option.value,) + OPTION_KEY_ALIASES.get(option, ()):
        if key in options:
            return options[key]
    return None

def coerce_option_value(value: Any) -> Any:
    # string booleans and all-digit strings become real bools and ints.
    if value == "true":
        return True
    if value == "false":
        return False
    if isinstance(value, str) and _ALL_DIGITS.match(value):
        return int(value)
    return value

def options_from_request(request: OptionsRequest) -> Dict[str, Any]:
    """
    Extracts the allow-listed fileset options from a request.

    Absent and None values are skipped; everything else on the request is
    ignored rather than rejected.
    """
    result: Dict[str, Any] = {}
    for option in REQUEST_OPTION_KEYS:
        value = _lookup(request.options, option)
        if value is None:
            continue
        result[option.value] = coerce_option_value(value)
    log.debug("request_options_extracted", request_key=request.key, options=sorted(result))
    return result
