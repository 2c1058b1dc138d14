'''
JSON string escaping.

    Control characters, double quotes and backslashes become JSON escape
    sequences; everything else (DEL and non-ASCII included) is copied verbatim.
'''

_SHORT_ESCAPES = {
    '\n': '\\n',
    '\b': '\\b',
    '\f': '\\f',
    '\t': '\\t',
    '\v': '\\u000b',
    '\r': '\\r',
    '"':  '\\"',
    '\\': '\\\\',
}


def _build_table() -> dict[str, str]:
    table = dict(_SHORT_ESCAPES)
    for code in range(0, 8):
        table[chr(code)] = f'\\u000{code}'
    for code in range(14, 32):
        table[chr(code)] = f'\\u00{code:02X}'
    return table


# every character with a non-verbatim form
ESCAPE_TABLE = _build_table()


def _check(s) -> None:
    if not isinstance(s, str):
        raise TypeError(f'expected str, got {type(s).__name__}')


def escape_json_unquoted_into(s: str, out: list[str]) -> None:
    '''Appends the escaped form of `s` to `out`, without surrounding quotes.'''
    _check(s)
    table = ESCAPE_TABLE
    out.extend(table.get(ch, ch) for ch in s)


def escape_json_into(s: str, out: list[str]) -> None:
    '''Appends `s` escaped and wrapped in double quotes to `out`.'''
    _check(s)
    out.append('"')
    escape_json_unquoted_into(s, out)
    out.append('"')


def escape_json_unquoted(s: str) -> str:
    '''
    Escape `s` for use inside a JSON string literal.

    Parameters:
    -----------
    s : str
        Text to escape.

    Returns:
    --------
    str
        Escaped text, without surrounding quotes.
    '''
    out = []
    escape_json_unquoted_into(s, out)
    return ''.join(out)


def escape_json(s: str) -> str:
    '''Escape `s` and wrap it in double quotes, producing a JSON string literal.'''
    out = []
    escape_json_into(s, out)
    return ''.join(out)
