"""
Tests for base64url token transcoding.
"""
import pytest
from chipin.services import codec_service
from chipin.services.exceptions import DecodeError


def test_encode_uses_url_safe_alphabet():
    """Test that + and / are replaced and padding is stripped."""
    assert codec_service.encode(b"\xfb\xff") == "-_8"
    assert codec_service.encode(b"\xfb\xef\xbe") == "----"
    assert codec_service.encode(b"\xff\xff\xff") == "____"


def test_encode_strips_all_padding():
    """Test that one and two padding characters are both removed."""
    assert codec_service.encode(b"a") == "YQ"
    assert codec_service.encode(b"ab") == "YWI"
    assert codec_service.encode(b"abc") == "YWJj"


def test_decode_restores_padding():
    """Test decoding tokens whose padding was stripped."""
    assert codec_service.decode("YQ") == b"a"
    assert codec_service.decode("YWI") == b"ab"
    assert codec_service.decode("-_8") == b"\xfb\xff"


def test_decode_inverts_encode():
    """Test that decode(encode(x)) == x for every byte value."""
    data = bytes(range(256))
    assert codec_service.decode(codec_service.encode(data)) == data


def test_decode_empty_token():
    """Test that an empty token decodes to no bytes."""
    assert codec_service.decode("") == b""


@pytest.mark.parametrize("token", ["ab$c", "YW I", "YQ==x", "ééé"])
def test_decode_rejects_non_alphabet_characters(token):
    """Test that characters outside the alphabet are rejected."""
    with pytest.raises(DecodeError):
        codec_service.decode(token)


def test_decode_rejects_impossible_length():
    """Test that a length of 4n+1 can never be valid base64."""
    with pytest.raises(DecodeError):
        codec_service.decode("YWJjZ")


def test_decode_error_is_value_error():
    """Test that DecodeError can be handled as a ValueError."""
    with pytest.raises(ValueError):
        codec_service.decode("*")
