"""Tests for response decoding."""

import pytest

from apiwalk.core import DecodeError, decode, encode


@pytest.mark.core
class TestDecode:
    """decode() accepts well-formed JSON and nothing else"""

    def test_nested_structures(self):
        body = b'{"slides":[{"lines":[{},{"member":{"id":4321,"ok":true,"x":null,"t":1.5}}]}]}'
        value = decode(body)
        assert value["slides"][0]["lines"][1]["member"] == {"id": 4321, "ok": True, "x": None, "t": 1.5}

    def test_utf8_content(self):
        assert decode('{"name":"Baroness Smith of Llanfaes – Ŵ"}'.encode("utf-8")) == {
            "name": "Baroness Smith of Llanfaes – Ŵ"
        }

    def test_utf8_bom_tolerated(self):
        assert decode(b"\xef\xbb\xbf[1,2]") == [1, 2]

    def test_str_input(self):
        assert decode('"plain"') == "plain"

    def test_object_order_preserved(self):
        assert list(decode(b'{"b":1,"a":2,"c":3}')) == ["b", "a", "c"]

    def test_int_and_float(self):
        value = decode(b"[1, -2, 3.5, 1e3]")
        assert value == [1, -2, 3.5, 1000.0]
        assert isinstance(value[0], int)
        assert isinstance(value[2], float)

    @pytest.mark.parametrize(
        "body",
        [
            b"",
            b'{"a": 1',           # unterminated object
            b"[1, 2",             # unterminated array
            b'"abc',              # unterminated string
            b'{"a": 1} trailing',  # trailing garbage
            b"[1] [2]",
            b'"bad \\x escape"',  # invalid escape
            b"{'a': 1}",          # single quotes
            b"NaN",
            b"[Infinity]",
            b"[-Infinity]",
            b"\xff\xfe\x00",      # not UTF-8
        ],
    )
    def test_rejects_malformed(self, body):
        with pytest.raises(DecodeError):
            decode(body)

    def test_error_carries_position(self):
        with pytest.raises(DecodeError) as exc:
            decode(b'{\n  "a": 1,\n  oops\n}')
        assert exc.value.reason
        assert exc.value.line == 3
        assert exc.value.column is not None

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode(b"{")

    def test_rejects_non_bytes(self):
        with pytest.raises(TypeError):
            decode(123)


@pytest.mark.core
class TestEncodeRoundTrip:
    """decode(encode(v)) == v for constructible values"""

    @pytest.mark.parametrize(
        "value",
        [
            None,
            True,
            0,
            -17,
            2.25,
            "",
            "Lord Example – ünïcode \"quoted\" \\ back\nslash",
            [],
            {},
            {"slides": [{"lines": [{}, {"member": {"nameFullTitle": "Lord Example", "id": 4321}}]}]},
            [1, [2, [3, [None, {"deep": [True, False]}]]]],
            "\ud800",
            {"lone": ["\udfff", "ok \ud83d"]},
        ],
    )
    def test_round_trip(self, value):
        assert decode(encode(value)) == value

    def test_decoded_lone_surrogate_round_trips(self):
        """\\ud800 is valid JSON; encoding what it decodes to must not fail"""
        value = decode(b'"\\ud800"')
        assert decode(encode(value)) == value == "\ud800"

    def test_encode_rejects_nan(self):
        with pytest.raises(ValueError):
            encode(float("nan"))
