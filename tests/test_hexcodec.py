import pytest

from md5kit.util.hexcodec import HexCodec, HEX_DIGITS


def test_encode_high_nibble_first():
    assert HexCodec.encode(bytes([0x00, 0x0f, 0xf0, 0xab, 0xff])) == '000ff0abff'


def test_encode_matches_bytes_hex():
    data = bytes(range(256))
    assert HexCodec.encode(data) == data.hex()


def test_decode_either_case():
    assert HexCodec.decode('D41D8cd9') == bytes([0xd4, 0x1d, 0x8c, 0xd9])
    assert HexCodec.decode('') == b''


@pytest.mark.parametrize('bad', ['abc', 'zz', '0g', '  '])
def test_decode_rejects_malformed(bad):
    with pytest.raises(ValueError):
        HexCodec.decode(bad)


def test_tables():
    assert HEX_DIGITS == '0123456789abcdef'
    assert HexCodec.itoh()[0xab] == 'ab'
    assert HexCodec.htoi()['7f'] == 0x7f
    assert len(HexCodec.htoi()) == len(HexCodec.itoh()) == 256


def test_tables_are_copies():
    table = HexCodec.htoi()
    table['00'] = 99
    assert HexCodec.htoi()['00'] == 0
    assert HexCodec.decode('00') == b'\x00'
