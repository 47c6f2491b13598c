"""Phone number cleaning and validation.

Pure domain logic, no framework dependencies.
"""

from dataclasses import dataclass
from urllib.parse import quote

from direct_calling.domain.errors import InvalidInput

_DIGITS = "0123456789"
_SEPARATORS = " -().\t"


@dataclass(frozen=True)
class NumberRule:
    """Characters a platform accepts in a ``tel:`` number."""

    name: str
    dial_chars: str
    separators: str = _SEPARATORS


# Dialer intents accept pause/wait and the hash key
PROMPTED_RULE = NumberRule(name="prompted", dial_chars=_DIGITS + "+*#,;")
# tel: URLs opened through a URL handler only keep digits, plus and star
URL_SCHEME_RULE = NumberRule(name="url_scheme", dial_chars=_DIGITS + "+*")


def clean_phone_number(raw: str, rule: NumberRule) -> str:
    """Strip separators and return the dialable number.

    Raises InvalidInput for empty input, characters outside the rule,
    or input that is empty once separators are removed.
    """
    if raw is None or not str(raw).strip():
        raise InvalidInput("Phone number cannot be empty")

    cleaned = []
    for ch in str(raw).strip():
        if ch in rule.dial_chars:
            cleaned.append(ch)
        elif ch in rule.separators:
            continue
        else:
            raise InvalidInput(f"Invalid character {ch!r} in phone number")

    number = "".join(cleaned)
    if not number:
        raise InvalidInput("Invalid phone number")
    # A leading plus is the only place it is meaningful
    if "+" in number[1:]:
        raise InvalidInput("Invalid phone number format")
    return number


def to_tel_uri(number: str) -> str:
    # "#" would otherwise start a URI fragment
    return "tel:" + quote(number, safe="+*,;")
