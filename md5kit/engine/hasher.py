import hmac
from typing import Iterable

from md5kit.engine.md5 import md5_init, to_md5
from md5kit.util.hexcodec import HexCodec


def _message(data) -> bytes | bytearray | memoryview:
    if isinstance(data, str):
        return data.encode('utf-8')
    return data


def digest(data) -> str:
    '''
    One-shot MD5 of an in-memory message.

        Like every one-shot helper in this module, `str` input is hashed
        as its UTF-8 encoding. Only MD5Context.update insists on bytes.

    Parameters:
    -----------
    data : bytes | bytearray | memoryview | str
        The whole message.

    Returns:
    --------
    str
        MD5 hash as a 32-character lowercase hexadecimal string.
    '''
    ctx = md5_init()
    ctx.update(_message(data))
    return HexCodec.encode(ctx.finalize())


def hash_md5(s: str) -> str:
    '''
    Hash string with MD5.

    Parameters:
    -----------
    s : str
        Plaintext string, encoded as UTF-8.

    Returns:
    --------
    str
        MD5 hash as a 32-character hexadecimal string.
    '''
    return digest(s.encode('utf-8'))


def hash_mapping(items: Iterable[str]) -> dict[str, str]:
    '''
    Hash every string and map each hash back to its plaintext.

    Parameters:
    -----------
    items : Iterable[str]
        Plaintext strings. Duplicates collapse onto one entry.

    Returns:
    --------
    dict[str, str]
        {hash: plaintext}, in first-seen order.
    '''
    return {hash_md5(s): s for s in items}


def verify(data, expected: str) -> bool:
    '''True if the MD5 of `data` equals the hex digest `expected` (either case).'''
    want = HexCodec.decode(expected)
    return hmac.compare_digest(to_md5(_message(data)), want)
