from __future__ import annotations

MODULE_KEYWORD = "module"

SIMPLE_ESCAPES = {
    "a": b"\a", "b": b"\b", "f": b"\f", "n": b"\n", "r": b"\r",
    "t": b"\t", "v": b"\v", "\\": b"\\", '"': b'"',
}
HEX_ESCAPES = {"x": 2, "u": 4, "U": 8}
OCTAL_DIGITS = "01234567"
HEX_DIGITS = "0123456789abcdefABCDEF"


def _unescape(body: str) -> str | None:
    """
    Decode the inside of a Go double-quoted string literal.

    Follows strconv.Unquote: \\x and octal escapes are raw bytes, \\u and
    \\U are code points, and any other escape (including \\' and \\/) is
    invalid. Returns None when the literal is malformed.
    """
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == '"':
            return None
        if ch != "\\":
            out += ch.encode("utf-8")
            i += 1
            continue

        if i + 1 >= len(body):
            return None
        esc = body[i + 1]
        if esc in SIMPLE_ESCAPES:
            out += SIMPLE_ESCAPES[esc]
            i += 2
        elif esc in HEX_ESCAPES:
            digits = body[i + 2:i + 2 + HEX_ESCAPES[esc]]
            if len(digits) != HEX_ESCAPES[esc] or any(d not in HEX_DIGITS for d in digits):
                return None
            value = int(digits, 16)
            if esc == "x":
                out.append(value)
            else:
                if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
                    return None
                out += chr(value).encode("utf-8")
            i += 2 + len(digits)
        elif esc in OCTAL_DIGITS:
            digits = body[i + 1:i + 4]
            if len(digits) != 3 or any(d not in OCTAL_DIGITS for d in digits):
                return None
            value = int(digits, 8)
            if value > 0xFF:
                return None
            out.append(value)
            i += 4
        else:
            return None

    try:
        return out.decode("utf-8")
    except UnicodeDecodeError:
        # module paths are text; byte escapes that aren't UTF-8 can't be one
        return None


def _unquote(value: str) -> str:
    """Unquote a Go string literal; return "" when it is malformed."""
    quote = value[0]
    if len(value) < 2 or value[-1] != quote:
        return ""
    body = value[1:-1]
    if quote == "`":
        return "" if "`" in body else body
    return _unescape(body) or ""


def module_path(go_mod: str) -> str:
    """
    Return the module path declared in go.mod text, or "" if there is none.

    Deliberately lenient: this does not parse the whole file, it only looks
    for the first line of the form `module <path>`. Comments are ignored and
    quoted paths are unquoted with Go's string literal rules. A quoted path
    that fails to unquote yields "".
    """
    for line in go_mod.split("\n"):
        comment = line.find("//")
        if comment >= 0:
            line = line[:comment]
        line = line.strip()
        if not line.startswith(MODULE_KEYWORD):
            continue

        rest = line[len(MODULE_KEYWORD):]
        stripped = rest.strip()
        # "modulefoo" or a bare "module" keyword
        if len(stripped) == len(rest) or not stripped:
            continue

        if stripped[0] in ('"', "`"):
            return _unquote(stripped)
        return stripped
    return ""
