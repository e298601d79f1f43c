"""JSON share files.

Two layouts are understood; both decode to a ShareSet and nothing in the
arithmetic core depends on either.

Indexed, base-encoded (x is the entry key, y is `value` read in `base`):

    {"keys": {"n": 4, "k": 3},
     "1": {"base": "10", "value": "4"},
     "2": {"base": "2", "value": "111"}}

Token list:

    {"tokens": [{"x": "1", "y": "5"}, {"x": "2", "y": "7"}],
     "mod": "17", "k": 2, "maxBadTokens": 1}
"""

import json
import string

from secretfinder.errors import ShareFormatError
from secretfinder.field import DEFAULT_MODULUS
from secretfinder.shares import Share, ShareSet

DIGITS = string.digits + string.ascii_lowercase

MODULUS_KEYS = ('modulus', 'mod', 'prime')


def decode_value(value: str, base: int) -> int:
    """Decode a digit string in base 2..36 (case-insensitive)."""
    if not 2 <= base <= 36:
        raise ShareFormatError(f"Unsupported base {base}")
    if not value:
        raise ShareFormatError("Empty value")
    result = 0
    for ch in value.lower():
        digit = DIGITS.find(ch)
        if digit < 0 or digit >= base:
            raise ShareFormatError(f"Invalid digit {ch!r} for base {base}")
        result = result * base + digit
    return result


def _as_int(value, what: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ShareFormatError(f"{what} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            pass
    raise ShareFormatError(f"{what} must be an integer, got {value!r}")


def _modulus(data: dict, modulus: int = None) -> int:
    if modulus is not None:
        return modulus
    for key in MODULUS_KEYS:
        if key in data:
            return _as_int(data[key], key)
    return DEFAULT_MODULUS


def _from_indexed(data: dict, modulus: int = None) -> ShareSet:
    keys = data['keys']
    if not isinstance(keys, dict) or 'k' not in keys:
        raise ShareFormatError("'keys' must be an object with 'k'")
    k = _as_int(keys['k'], 'keys.k')

    shares = []
    for name, entry in data.items():
        if name == 'keys' or name in MODULUS_KEYS:
            continue
        if not name.isdecimal():
            raise ShareFormatError(f"Unexpected key {name!r}")
        if not isinstance(entry, dict) or 'base' not in entry or 'value' not in entry:
            raise ShareFormatError(f"Share {name!r} needs 'base' and 'value'")
        base = _as_int(entry['base'], f"{name}.base")
        value = entry['value']
        if not isinstance(value, str):
            value = str(value)
        shares.append(Share(int(name), decode_value(value, base)))

    if 'n' in keys:
        n = _as_int(keys['n'], 'keys.n')
        if n != len(shares):
            raise ShareFormatError(
                f"keys.n is {n} but {len(shares)} shares are present")

    shares.sort(key=lambda s: s.x)
    return ShareSet(shares=shares, k=k, modulus=_modulus(data, modulus),
                    extra={'layout': 'indexed'})


def _from_tokens(data: dict, modulus: int = None) -> ShareSet:
    tokens = data['tokens']
    if not isinstance(tokens, list):
        raise ShareFormatError("'tokens' must be a list")
    if 'k' not in data:
        raise ShareFormatError("Missing 'k'")

    shares = []
    for i, tok in enumerate(tokens):
        if not isinstance(tok, dict) or 'x' not in tok or 'y' not in tok:
            raise ShareFormatError(f"Token {i} needs 'x' and 'y'")
        shares.append(Share(_as_int(tok['x'], f"tokens[{i}].x"),
                            _as_int(tok['y'], f"tokens[{i}].y")))

    max_bad = _as_int(data.get('maxBadTokens', data.get('max_bad', 0)),
                      'maxBadTokens')
    return ShareSet(shares=shares, k=_as_int(data['k'], 'k'),
                    modulus=_modulus(data, modulus), max_bad=max_bad,
                    robust=True, extra={'layout': 'tokens'})


def from_dict(data: dict, modulus: int = None) -> ShareSet:
    """Build a ShareSet from decoded JSON, detecting the layout.

    modulus overrides whatever the document declares.
    """
    if not isinstance(data, dict):
        raise ShareFormatError("Share document must be a JSON object")
    if 'tokens' in data:
        return _from_tokens(data, modulus)
    if 'keys' in data:
        return _from_indexed(data, modulus)
    raise ShareFormatError("Expected a 'tokens' list or a 'keys' object")


def parse_shares(text: str, modulus: int = None) -> ShareSet:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ShareFormatError(f"Invalid JSON: {e}") from e
    return from_dict(data, modulus)


def load_shares(filepath: str, modulus: int = None) -> ShareSet:
    """Read and parse a share file."""
    with open(filepath) as f:
        share_set = parse_shares(f.read(), modulus)
    share_set.source = str(filepath)
    return share_set
