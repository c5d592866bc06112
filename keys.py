import curses

ESC = 27
TAB = 9
ENTER_KEYS = (10, 13, curses.KEY_ENTER)
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)
CONFIRM_KEYS = ENTER_KEYS + (ESC, TAB)


def decode_key(ch):
    """Split a key from getch()/get_wch() into (code, char).

    ``char`` is the printable character, or None for control and
    function keys.
    """
    if isinstance(ch, str):
        code = ord(ch) if len(ch) == 1 else -1
    else:
        code = ch
    if 32 <= code < 127 or (code >= 160 and isinstance(ch, str)):
        return code, chr(code)
    return code, None
