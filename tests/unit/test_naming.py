"""Tests for naming conventions."""

import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from meterexport.core.models import MeterType
from meterexport.core.naming import (
    CAMEL_CASE,
    IDENTITY,
    SNAKE_CASE,
    UPPER_CAMEL_CASE,
    EscapingNamingConvention,
)


@pytest.mark.core
class TestWordJoiningConventions:
    """Tests for the identity, snake and camel case conventions."""

    @pytest.mark.tra("Naming.CamelCase.Name")
    @pytest.mark.tier(0)
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("http.server.requests", "httpServerRequests"),
            ("myTimer", "myTimer"),
            ("jvm.GC.pause", "jvmGCPause"),
            ("a..b", "aB"),
            (".leading", "Leading"),
            ("", ""),
        ],
    )
    def test_camel_case_name(self, raw: str, expected: str) -> None:
        """Dot-separated words are joined in lower camel case."""
        assert CAMEL_CASE.name(raw, MeterType.COUNTER) == expected

    @pytest.mark.tra("Naming.UpperCamelCase.Name")
    @pytest.mark.tier(0)
    def test_upper_camel_case_name(self) -> None:
        """Upper camel case capitalizes the first word too."""
        assert UPPER_CAMEL_CASE.name("http.requests", MeterType.TIMER) == "HttpRequests"

    @pytest.mark.tra("Naming.CamelCase.Tags")
    @pytest.mark.tier(0)
    def test_camel_case_leaves_tag_values(self) -> None:
        """Tag keys are converted, tag values are not."""
        assert CAMEL_CASE.tag_key("status.code") == "statusCode"
        assert CAMEL_CASE.tag_value("not.found") == "not.found"

    @pytest.mark.tra("Naming.SnakeCase")
    @pytest.mark.tier(0)
    def test_snake_case(self) -> None:
        """Snake case replaces dots with underscores."""
        assert SNAKE_CASE.name("http.server.requests", MeterType.TIMER) == (
            "http_server_requests"
        )
        assert SNAKE_CASE.tag_key("status.code") == "status_code"
        assert SNAKE_CASE.tag_value("a.b") == "a.b"

    @pytest.mark.tra("Naming.Identity")
    @pytest.mark.tier(0)
    def test_identity(self) -> None:
        """Identity leaves everything untouched."""
        assert IDENTITY.name('we"ird.name', MeterType.GAUGE, "bytes") == 'we"ird.name'
        assert IDENTITY.tag_key("k.k") == "k.k"
        assert IDENTITY.tag_value("v\n") == "v\n"


@pytest.mark.core
class TestEscapingNamingConvention:
    """Tests for EscapingNamingConvention."""

    @pytest.mark.tra("Naming.Escaping.DefaultDelegate")
    @pytest.mark.tier(0)
    def test_defaults_to_camel_case(self) -> None:
        """Without a delegate, names are camel cased before escaping."""
        naming = EscapingNamingConvention()

        assert naming.delegate is CAMEL_CASE
        assert naming.name("http.requests", MeterType.COUNTER) == "httpRequests"

    @pytest.mark.tra("Naming.Escaping.Name")
    @pytest.mark.tier(0)
    def test_escapes_name(self) -> None:
        """Quotes in names are escaped after camel casing."""
        naming = EscapingNamingConvention()

        assert naming.name('my.na"me', MeterType.TIMER, None) == 'myNa\\"me'

    @pytest.mark.tra("Naming.Escaping.Tags")
    @pytest.mark.tier(0)
    def test_escapes_tag_key_and_value(self) -> None:
        """Tag keys and values are escaped."""
        naming = EscapingNamingConvention()

        assert naming.tag_key('a.b"c') == 'aB\\"c'
        assert naming.tag_value('say "hi"\n') == 'say \\"hi\\"\\n'
        assert naming.tag_value("C:\\temp") == "C:\\\\temp"

    @pytest.mark.tra("Naming.Escaping.Delegation")
    @pytest.mark.tier(0)
    def test_calls_delegate_with_arguments(self) -> None:
        """Every call goes through the delegate with the original arguments."""
        calls: list[tuple[object, ...]] = []

        class RecordingConvention:
            def name(
                self, name: str, meter_type: MeterType, base_unit: str | None = None
            ) -> str:
                calls.append(("name", name, meter_type, base_unit))
                return '"' + name

            def tag_key(self, key: str) -> str:
                calls.append(("tag_key", key))
                return '"' + key

            def tag_value(self, value: str) -> str:
                calls.append(("tag_value", value))
                return '"' + value

        naming = EscapingNamingConvention(RecordingConvention())

        assert naming.name("n", MeterType.GAUGE, "bytes") == '\\"n'
        assert naming.tag_key("k") == '\\"k'
        assert naming.tag_value("v") == '\\"v'
        assert calls == [
            ("name", "n", MeterType.GAUGE, "bytes"),
            ("tag_key", "k"),
            ("tag_value", "v"),
        ]

    @pytest.mark.tra("Naming.Escaping.Property")
    @pytest.mark.tier(0)
    @given(value=st.text())
    def test_tag_value_is_json_safe(self, value: str) -> None:
        """Any escaped tag value can be spliced into a JSON string."""
        naming = EscapingNamingConvention()

        assert json.loads('"' + naming.tag_value(value) + '"') == value
