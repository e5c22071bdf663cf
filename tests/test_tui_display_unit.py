from interface.tui_display import display_width, pad_display, trim_display, wrap_display


def test_display_width_counts_wide_chars():
    assert display_width("abc") == 3
    assert display_width("漢字") == 4


def test_trim_never_splits_wide_char():
    assert trim_display("漢字abc", 3) == "漢"
    assert trim_display("short", 10) == "short"
    assert trim_display("abcdef", 4, ellipsis="…") == "abc…"


def test_pad_display_exact_width():
    assert pad_display("ab", 4) == "ab  "
    assert pad_display("abcdef", 4) == "abc…"
    assert display_width(pad_display("漢字漢字", 5)) == 5


def test_wrap_keeps_newlines():
    assert wrap_display("abcd\nef", 2) == ["ab", "cd", "ef"]
    assert wrap_display("", 5) == [""]
