HEX_DIGITS = '0123456789abcdef'


class HexCodec:
    '''
    Byte ↔ hexadecimal conversion for digests.

        Each byte renders as two lowercase hex digits, high nibble first.
        Decoding accepts either case.
    '''
    _htoi = {f'{i:02x}': i for i in range(256)}
    _itoh = {i: HEX_DIGITS[i >> 4] + HEX_DIGITS[i & 0xf] for i in range(256)}

    @classmethod
    def htoi(cls) -> dict[str, int]:
        '''hexadecimal pair → byte value'''
        return dict(cls._htoi)

    @classmethod
    def itoh(cls) -> dict[int, str]:
        '''byte value → hexadecimal pair'''
        return dict(cls._itoh)

    @classmethod
    def encode(cls, data: bytes) -> str:
        return ''.join(cls._itoh[b] for b in data)

    @classmethod
    def decode(cls, h: str) -> bytes:
        '''
        Parse a hex string back into bytes.

        Parameters:
        -----------
        h : str
            Even-length string of hex digits, upper- or lowercase.

        Returns:
        --------
        bytes
            The decoded bytes.
        '''
        if len(h) % 2:
            raise ValueError(f'hex string has odd length {len(h)}')

        h = h.lower()
        try:
            return bytes(cls._htoi[h[i : i + 2]] for i in range(0, len(h), 2))
        except KeyError as e:
            raise ValueError(f'invalid hex digit pair {e.args[0]!r}') from None
