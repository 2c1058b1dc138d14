from md5kit.engine.md5 import (
    MD5Context,
    ContextFinalizedError,
    transform,
    md5_init,
    md5_update,
    md5_final,
    md5_stream,
    to_md5,
    get_md5,
)
from md5kit.engine.hasher import digest, hash_md5, hash_mapping, verify
