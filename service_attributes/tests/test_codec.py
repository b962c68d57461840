"""
Unit tests for the URL-safe parameter codec.
"""

import json
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from service_attributes.app import codec
from service_attributes.app.errors import DecodeError, JsonError, UtfError


class TestCodec:
    """Test cases for encode/decode."""

    @pytest.mark.parametrize("payload", [
        b"",
        b"a",
        b"ab",
        b"abc",
        bytes(range(256)),
        b"\xff\xfe\xfd",
        "https://rp.example/done?x=1&y=2".encode(),
    ])
    def test_round_trip(self, payload):
        """Decoding an encoded payload gives back the same bytes."""
        assert codec.decode(codec.encode(payload)) == payload

    @given(st.binary(max_size=512))
    @settings(max_examples=200)
    def test_round_trip_any_bytes(self, payload):
        """Every byte sequence survives encode then decode."""
        assert codec.decode(codec.encode(payload)) == payload

    @given(st.lists(st.text(max_size=40), max_size=8))
    def test_attribute_list_round_trip_any_names(self, attributes):
        """Any list of attribute names survives the JSON plus base64 round trip."""
        assert codec.decode_attribute_list(codec.encode_json(attributes)) == attributes

    def test_encode_uses_url_safe_alphabet(self):
        """Encoded tokens never contain characters that need escaping in a path."""
        token = codec.encode(bytes([0xfb, 0xff, 0xbf] * 10))
        assert "+" not in token
        assert "/" not in token
        assert set(token) <= set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_=")

    def test_encode_str_is_utf8(self):
        """Text input is encoded as UTF-8."""
        assert codec.decode(codec.encode("héllo")) == "héllo".encode("utf-8")

    def test_decode_accepts_missing_padding(self):
        """Unpadded tokens decode."""
        assert codec.decode("YQ") == b"a"
        assert codec.decode("YWI") == b"ab"

    def test_decode_rejects_standard_alphabet(self):
        """Characters from the standard alphabet are rejected."""
        with pytest.raises(DecodeError):
            codec.decode("ab+/")

    def test_decode_rejects_bad_padding(self):
        """Padding that does not complete a quantum is rejected."""
        with pytest.raises(DecodeError):
            codec.decode("YQ=")

    def test_decode_rejects_impossible_length(self):
        """A single dangling character cannot be decoded."""
        with pytest.raises(DecodeError):
            codec.decode("YWJjZ")

    def test_decode_rejects_garbage(self):
        """Characters outside the alphabet are rejected."""
        with pytest.raises(DecodeError) as exc_info:
            codec.decode("not base64!")
        assert exc_info.value.code == "DECODE_ERROR"


class TestStructuredDecoding:
    """Test cases for decoding UTF-8 and JSON payloads."""

    @pytest.mark.parametrize("attributes", [
        [],
        ["name"],
        ["name", "email", "birthdate"],
        ["naam", "ä-attribuut"],
    ])
    def test_attribute_list_round_trip(self, attributes):
        """An attribute list survives the JSON plus base64 round trip."""
        assert codec.decode_utf8_json(codec.encode_json(attributes)) == attributes
        assert codec.decode_attribute_list(codec.encode_json(attributes)) == attributes

    def test_decode_utf8(self):
        """URLs decode back to text."""
        url = "https://rp.example/done"
        assert codec.decode_utf8(codec.encode(url)) == url

    def test_decode_utf8_rejects_invalid_bytes(self):
        """Non-UTF-8 bytes fail with a UTF error."""
        with pytest.raises(UtfError):
            codec.decode_utf8(codec.encode(b"\xff\xfe"))

    def test_decode_json_stage_errors(self):
        """Each stage reports its own error kind."""
        with pytest.raises(DecodeError):
            codec.decode_utf8_json("%%%")
        with pytest.raises(UtfError):
            codec.decode_utf8_json(codec.encode(b"\xc3\x28"))
        with pytest.raises(JsonError):
            codec.decode_utf8_json(codec.encode("[\"name\""))

    def test_deeply_nested_json_is_a_json_error(self):
        """JSON nested past the parser's depth limit fails at the JSON stage."""
        token = codec.encode("[" * 5000 + "]" * 5000)
        with pytest.raises(JsonError) as exc_info:
            codec.decode_utf8_json(token)
        assert exc_info.value.code == "JSON_ERROR"
        with pytest.raises(JsonError):
            codec.decode_attribute_list(token)

    def test_attribute_list_shape_is_checked(self):
        """Valid JSON of the wrong shape is a JSON error."""
        with pytest.raises(JsonError):
            codec.decode_attribute_list(codec.encode(json.dumps({"name": True})))
        with pytest.raises(JsonError):
            codec.decode_attribute_list(codec.encode(json.dumps(["name", 1])))
