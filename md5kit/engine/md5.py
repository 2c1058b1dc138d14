'''
Streaming MD5 (RFC 1321) digest engine.

CONCEPTUAL FLOW
    init → update (any number of chunks) → finalize (padding + length) → 16-byte digest

BUFFERING
    Input that does not complete a 64-byte block waits in the context buffer.
    Complete blocks taken straight from the caller's input are transformed
    through a memoryview, without being copied into the buffer first.

STATE
    The four registers (A, B, C, D) rotate every step.
    After all 64 steps they are added back into the previous state.
'''

import logging
from typing import BinaryIO
import numpy as np

from md5kit.util.config import get_config
from md5kit.util.hexcodec import HexCodec

logger = logging.getLogger(__name__)


MD5_BLOCK_SIZE = 64     # 512 bits
MD5_DIGEST_SIZE = 16    # 128 bits
MD5_LENGTH_SIZE = 8     # 64-bit little-endian bit count

_MASK32 = 0xffffffff
_MASK64 = 0xffffffffffffffff

MD5_INIT_STATE = (0x67452301, 0xefcdab89, 0x98badcfe, 0x10325476)

# 0x80 then zeros; at most 64 bytes are ever needed
_PADDING = b'\x80' + bytes(MD5_BLOCK_SIZE - 1)


# left-rotation amounts for each of the 64 steps, one row per round
shift = (7, 12, 17, 22, 7, 12, 17, 22, 7, 12, 17, 22, 7, 12, 17, 22,
         5,  9, 14, 20, 5,  9, 14, 20, 5,  9, 14, 20, 5,  9, 14, 20,
         4, 11, 16, 23, 4, 11, 16, 23, 4, 11, 16, 23, 4, 11, 16, 23,
         6, 10, 15, 21, 6, 10, 15, 21, 6, 10, 15, 21, 6, 10, 15, 21)


# T[i] = floor(|sin(i + 1)| * 2^32)
sines = np.abs(np.sin(np.arange(64) + 1))
sine_randomness = tuple(int(x) for x in np.floor(2 ** 32 * sines))


def left_rotate(x: int, y: int) -> int:
    '''
    Rotates the bits of a 32-bit integer `x` left by `y` positions.

    Parameters:
    -----------
    x : int
        The 32-bit integer to rotate.
    y : int
        Number of bits to rotate by (0–31).

    Returns:
    --------
    int
        The left-rotated 32-bit integer.
    '''
    x &= _MASK32
    return ((x << y) | (x >> (32 - y))) & _MASK32


def bit_not(x: int) -> int:
    '''Bitwise NOT for a 32-bit integer.'''
    return _MASK32 - x


'''
---------------------------------------------------------------------
Mixing functions F, G, H, I
   Each takes three 32-bit inputs and returns one 32-bit output.
---------------------------------------------------------------------
'''
def F(x: int, y: int, z: int) -> int:
    # selects bits from y where x is set, otherwise from z
    return (x & y) | (bit_not(x) & z)

def G(x: int, y: int, z: int) -> int:
    # selects bits from x where z is set, otherwise from y
    return (x & z) | (y & bit_not(z))

def H(x: int, y: int, z: int) -> int:
    return x ^ y ^ z

def I(x: int, y: int, z: int) -> int:
    return y ^ (x | bit_not(z))


mixer_for_step = (F,) * 16 + (G,) * 16 + (H,) * 16 + (I,) * 16

# which message word each step consumes
msg_idx_for_step = (
    tuple(i for i in range(16)) +
    tuple((5 * i + 1) % 16 for i in range(16)) +
    tuple((3 * i + 5) % 16 for i in range(16)) +
    tuple((7 * i) % 16 for i in range(16))
)

_STEPS = tuple(zip(mixer_for_step, msg_idx_for_step, sine_randomness, shift))


class ContextFinalizedError(RuntimeError):
    '''Raised when a finalized (wiped) MD5 context is used again.'''


def decode_words(block) -> list[int]:
    '''Split a 64-byte block into sixteen little-endian 32-bit words.'''
    return [int.from_bytes(block[i : i + 4], byteorder = 'little')
            for i in range(0, MD5_BLOCK_SIZE, 4)]


def encode_words(words) -> bytes:
    '''Serialise 32-bit words as consecutive little-endian 4-byte groups.'''
    return b''.join(w.to_bytes(length = 4, byteorder = 'little') for w in words)


def transform(state: tuple[int, int, int, int], block) -> tuple[int, int, int, int]:
    '''
    Core MD5 compression function.

    Mixes one 64-byte block into the given state and returns the new state.
    The input state is not modified.

    Parameters:
    -----------
    state : tuple[int, int, int, int]
        Current (A, B, C, D) registers.

    block : bytes | bytearray | memoryview
        Exactly 64 bytes of message.

    Returns:
    --------
    tuple[int, int, int, int]
        The updated registers.
    '''
    if len(block) != MD5_BLOCK_SIZE:
        raise ValueError(f'MD5 block must be {MD5_BLOCK_SIZE} bytes, got {len(block)}')

    msg_ints = decode_words(block)
    a, b, c, d = state

    for bit_mixer, msg_idx, constant, s in _STEPS:
        a = (a + bit_mixer(b, c, d) + msg_ints[msg_idx] + constant) & _MASK32
        a = (b + left_rotate(a, s)) & _MASK32
        a, b, c, d = d, a, b, c

    return (
        (state[0] + a) & _MASK32,
        (state[1] + b) & _MASK32,
        (state[2] + c) & _MASK32,
        (state[3] + d) & _MASK32,
    )


class MD5Context:
    '''
    Mutable MD5 hashing context.

    Attributes:
    -----------
    state : tuple[int, int, int, int]
        The four 32-bit registers (A, B, C, D).

    bit_count : int
        Total number of message bits fed so far, modulo 2^64.

    buffer : bytearray
        64-byte scratch buffer holding the unprocessed tail of the input.

    finalized : bool
        Set once the digest has been produced or the context wiped; it is unusable afterwards.
    '''

    def __init__(self):
        self.state = MD5_INIT_STATE
        self.bit_count = 0
        self.buffer = bytearray(MD5_BLOCK_SIZE)
        self.finalized = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.finalized:
            self.wipe()
        return False

    def __repr__(self):
        status = 'finalized' if self.finalized else f'{self.bit_count // 8} bytes'
        return f'<MD5Context {status}>'

    @property
    def count(self) -> tuple[int, int]:
        '''bit count as (low, high) 32-bit words'''
        return self.bit_count & _MASK32, self.bit_count >> 32

    @property
    def n_filled_bytes(self) -> int:
        '''bytes currently waiting in the buffer'''
        return (self.bit_count >> 3) & (MD5_BLOCK_SIZE - 1)

    def _check_live(self, op: str) -> None:
        if self.finalized:
            logger.error('%s called on a finalized MD5 context', op)
            raise ContextFinalizedError(f'cannot {op}: MD5 context already finalized')

    def update(self, data) -> None:
        '''
        Appends `data` to the message.

        Parameters:
        -----------
        data : bytes | bytearray | memoryview
            Any number of bytes, including none.
        '''
        self._check_live('update')
        if isinstance(data, str):
            raise TypeError('MD5 input must be bytes-like, not str')

        view = memoryview(data).cast('B')
        n = len(view)
        index = self.n_filled_bytes
        self.bit_count = (self.bit_count + (n << 3)) & _MASK64
        part_len = MD5_BLOCK_SIZE - index

        if n >= part_len:
            # complete the pending block, then eat whole blocks straight from the input
            self.buffer[index:] = view[:part_len]
            self.state = transform(self.state, self.buffer)

            i = part_len
            while i + MD5_BLOCK_SIZE <= n:
                self.state = transform(self.state, view[i : i + MD5_BLOCK_SIZE])
                i += MD5_BLOCK_SIZE

            self.buffer[: n - i] = view[i:]
        else:
            self.buffer[index : index + n] = view

    def process(self, stream: BinaryIO, chunk_size: int | None = None) -> None:
        '''
        Reads a binary stream until exhausted, feeding every chunk to `update`.

        Parameters:
        -----------
        stream : BinaryIO
            Any object with a `read(n)` method returning bytes.

        chunk_size : int | None
            Bytes requested per read. Defaults to the configured `chunk_size`.
        '''
        self._check_live('process')
        if chunk_size is None:
            chunk_size = get_config()['chunk_size']
        if chunk_size <= 0:
            raise ValueError(f'chunk_size must be positive, got {chunk_size}')

        n_chunks = 0
        while chunk := stream.read(chunk_size):
            self.update(chunk)
            n_chunks += 1

        logger.debug('processed %d chunk(s) of up to %d bytes', n_chunks, chunk_size)

    def finalize(self) -> bytes:
        '''
        Pads the message, appends its bit length, and returns the 16-byte digest.

            Appends 0x80, then zeros until the buffer holds 56 bytes,
            then the bit count recorded *before* padding (64-bit little-endian).
            The context is wiped afterwards and cannot be reused.

        Returns:
        --------
        bytes
            16-byte MD5 digest.
        '''
        self._check_live('finalize')

        bits = self.bit_count.to_bytes(length = MD5_LENGTH_SIZE, byteorder = 'little')
        index = self.n_filled_bytes
        pad_len = 56 - index if index < 56 else 120 - index

        self.update(_PADDING[:pad_len])
        self.update(bits)
        assert self.n_filled_bytes == 0

        digest = encode_words(self.state)
        logger.debug('MD5 context finalized after %d message bytes', int.from_bytes(bits, 'little') // 8)

        self.wipe()
        return digest

    def digest(self) -> bytes:
        '''Finalizes and returns the raw 16-byte digest.'''
        return self.finalize()

    def hexdigest(self) -> str:
        '''Finalizes and returns the digest as 32 lowercase hex characters.'''
        return HexCodec.encode(self.finalize())

    def wipe(self) -> None:
        '''Zeroes registers, counter and buffer in place; the context is consumed afterwards.'''
        self.finalized = True
        self.state = (0, 0, 0, 0)
        self.bit_count = 0
        self.buffer[:] = bytes(MD5_BLOCK_SIZE)


def _as_bytes(s) -> bytes | bytearray | memoryview:
    if isinstance(s, str):
        return s.encode('utf-8')
    return s


def md5_init() -> MD5Context:
    '''Returns a fresh MD5 context.'''
    return MD5Context()


def md5_update(ctx: MD5Context, data) -> None:
    ctx.update(data)


def md5_final(ctx: MD5Context) -> bytes:
    return ctx.finalize()


def to_md5(s) -> bytes:
    '''
    Compute the raw MD5 digest of `s`.

    Parameters:
    -----------
    s : bytes | str
        Input message; `str` is encoded as UTF-8.

    Returns:
    --------
    bytes
        16-byte MD5 digest of the input.

    Example:
    --------
    >>> to_md5(b'abc').hex()
    '900150983cd24fb0d6963f7d28e17f72'
    '''
    ctx = md5_init()
    ctx.update(_as_bytes(s))
    return ctx.finalize()


def get_md5(s) -> str:
    '''Hex MD5 digest of `s`.'''
    return HexCodec.encode(to_md5(s))


def md5_stream(stream: BinaryIO, chunk_size: int | None = None) -> bytes:
    '''
    Convenience function to hash an open binary stream.
    '''
    ctx = md5_init()
    ctx.process(stream, chunk_size)
    return ctx.finalize()
