"""QWERTY key adjacency used to discount likely typos."""

QWERTY_NEIGHBORS: dict[str, str] = {
    "q": "was",
    "w": "qeasd",
    "e": "wrsdf",
    "r": "etdfg",
    "t": "ryfgh",
    "y": "tughj",
    "u": "yihjk",
    "i": "uojkl",
    "o": "ipkl",
    "p": "ol",
    "a": "qwszx",
    "s": "qweadzxc",
    "d": "wersfxcv",
    "f": "ertdgcvb",
    "g": "rtyfhvbn",
    "h": "tyugjbnm",
    "j": "yuihknm",
    "k": "uiojlm",
    "l": "iopk",
    "z": "asx",
    "x": "asdzc",
    "c": "sdfxv",
    "v": "dfgcb",
    "b": "fghvn",
    "n": "ghjbm",
    "m": "hjkn",
}


def are_keys_adjacent(a: str, b: str) -> bool:
    """Return True if two characters sit next to each other on a QWERTY keyboard."""
    return len(b) == 1 and b.lower() in QWERTY_NEIGHBORS.get(a.lower(), "")
