"""Naming conventions for meter names and tags.

Meter names are written as dot-separated words ("http.server.requests").
A naming convention turns them into the form a backend expects. The
conventions here are stateless and shared as module-level instances.
"""

from meterexport.core.encoding.json_text import escape_json
from meterexport.core.models import MeterType
from meterexport.core.ports import NamingConvention


class IdentityNamingConvention:
    """Leaves names and tags untouched."""

    def name(
        self, name: str, meter_type: MeterType, base_unit: str | None = None
    ) -> str:
        return name

    def tag_key(self, key: str) -> str:
        return key

    def tag_value(self, value: str) -> str:
        return value


class SnakeCaseNamingConvention(IdentityNamingConvention):
    """Joins words with underscores ("http.server" -> "http_server")."""

    def name(
        self, name: str, meter_type: MeterType, base_unit: str | None = None
    ) -> str:
        return name.replace(".", "_")

    def tag_key(self, key: str) -> str:
        return key.replace(".", "_")


def _camel_case(value: str) -> str:
    """Join dot-separated words, capitalizing every word after the first."""
    words = []
    for i, word in enumerate(value.split(".")):
        if not word:
            continue
        if i == 0 or word[0].isupper():
            words.append(word)
        else:
            words.append(word[0].upper() + word[1:])
    return "".join(words)


class CamelCaseNamingConvention(IdentityNamingConvention):
    """Lower camel case: "http.server.requests" -> "httpServerRequests".

    Args:
        upper: Capitalize the first word too ("HttpServerRequests").
    """

    def __init__(self, upper: bool = False) -> None:
        self._upper = upper

    def _convert(self, value: str) -> str:
        converted = _camel_case(value)
        if self._upper and converted:
            return converted[0].upper() + converted[1:]
        return converted

    def name(
        self, name: str, meter_type: MeterType, base_unit: str | None = None
    ) -> str:
        return self._convert(name)

    def tag_key(self, key: str) -> str:
        return self._convert(key)


IDENTITY = IdentityNamingConvention()
SNAKE_CASE = SnakeCaseNamingConvention()
CAMEL_CASE = CamelCaseNamingConvention()
UPPER_CAMEL_CASE = CamelCaseNamingConvention(upper=True)


class EscapingNamingConvention:
    """JSON-escapes everything a delegate convention produces.

    Use it where names and tags are spliced into a JSON payload as raw
    string fragments rather than passed through a JSON encoder.

    Example:
        ```python
        naming = EscapingNamingConvention()
        naming.tag_value('say "hi"')  # 'say \\"hi\\"'
        ```
    """

    def __init__(self, delegate: NamingConvention = CAMEL_CASE) -> None:
        """Initialize the convention with the delegate to escape.

        Args:
            delegate: Convention producing the unescaped text. Defaults to
                lower camel case.
        """
        self._delegate = delegate

    @property
    def delegate(self) -> NamingConvention:
        return self._delegate

    def name(
        self, name: str, meter_type: MeterType, base_unit: str | None = None
    ) -> str:
        return escape_json(self._delegate.name(name, meter_type, base_unit))

    def tag_key(self, key: str) -> str:
        return escape_json(self._delegate.tag_key(key))

    def tag_value(self, value: str) -> str:
        return escape_json(self._delegate.tag_value(value))
