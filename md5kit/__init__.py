from md5kit.engine import (
    MD5Context,
    ContextFinalizedError,
    transform,
    md5_init,
    md5_update,
    md5_final,
    md5_stream,
    to_md5,
    get_md5,
    digest,
    hash_md5,
    hash_mapping,
    verify,
)
from md5kit.util.hexcodec import HexCodec
from md5kit.util.jsonesc import escape_json, escape_json_unquoted

__version__ = '0.1.0'
