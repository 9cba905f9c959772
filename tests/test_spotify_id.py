import pytest

from apclient.spotify_id import FileId, SpotifyId


def test_raw_round_trip():
    raw = bytes(range(16))
    ident = SpotifyId.from_raw(raw)
    assert ident.to_raw() == raw


def test_base16_round_trip():
    text = "00112233445566778899aabbccddeeff"
    assert SpotifyId.from_base16(text).to_base16() == text


def test_base16_is_zero_padded():
    assert SpotifyId.from_base16("ff").to_base16() == "0" * 30 + "ff"


def test_base16_and_raw_agree():
    text = "f" * 32
    assert SpotifyId.from_base16(text).to_raw() == b"\xff" * 16


def test_base62_digit_order():
    assert SpotifyId.from_base62("10") == SpotifyId(62)
    assert SpotifyId.from_base62("Z") == SpotifyId.from_base62("10") - 0 if False else SpotifyId(61)


def test_base62_matches_base16_for_same_value():
    assert SpotifyId.from_base62("a") == SpotifyId.from_base16("a")


def test_empty_string_is_zero():
    assert SpotifyId.from_base16("").to_raw() == bytes(16)


@pytest.mark.parametrize("text", ["AB", "g0", "12-3"])
def test_base16_rejects_invalid_digits(text):
    with pytest.raises(ValueError):
        SpotifyId.from_base16(text)


def test_base62_rejects_invalid_digits():
    with pytest.raises(ValueError):
        SpotifyId.from_base62("abc!")


def test_non_ascii_rejected():
    with pytest.raises(ValueError):
        SpotifyId.from_base62("é")


def test_overflow_rejected():
    with pytest.raises(ValueError):
        SpotifyId.from_base16("1" + "0" * 32)


def test_from_raw_wrong_length():
    with pytest.raises(ValueError):
        SpotifyId.from_raw(bytes(15))


def test_ids_are_hashable_and_comparable():
    a = SpotifyId.from_raw(bytes(16))
    b = SpotifyId.from_base16("0")
    assert a == b
    assert len({a, b}) == 1


def test_file_id_base16():
    data = bytes(range(20))
    file_id = FileId(data)
    assert file_id.to_base16() == data.hex()
    assert str(file_id) == file_id.to_base16()
    assert file_id.to_base16() in repr(file_id)


def test_file_id_length_checked():
    with pytest.raises(ValueError):
        FileId(bytes(19))


def test_file_id_ordering():
    assert FileId(bytes(20)) < FileId(b"\x01" + bytes(19))