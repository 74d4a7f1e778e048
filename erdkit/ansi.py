"""Truncation of strings that carry ANSI colour and style escape sequences."""

ESCAPE = "\x1b"
RESET = "\x1b[0m"


def truncate(text: str, new_len: int) -> str:
    """Truncate ``text`` to ``new_len`` visible characters, keeping escape sequences.

    Escape sequences do not count towards the length. If truncation leaves a style
    sequence open, a reset sequence is appended. Only colour/style sequences
    (terminated by ``m``) are recognised, and every visible character is assumed
    to occupy a single code point.
    """
    pieces: list[str] = []
    open_sequence = False
    char_count = 0
    chars = iter(text)

    for ch in chars:
        pieces.append(ch)

        if ch == ESCAPE:
            terminated = False
            for code in chars:
                pieces.append(code)
                if code == "m":
                    open_sequence = not open_sequence
                    terminated = True
                    break
            if terminated:
                continue

        char_count += 1
        if char_count == new_len:
            break

    if open_sequence:
        pieces.append(RESET)

    return "".join(pieces)