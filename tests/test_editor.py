import pytest

from commonitor.editor import TextBuffer, TextStyle


def test_append_and_text():
    buf = TextBuffer()
    assert buf.append_text("hello ")
    buf.append_text("world")
    assert buf.text == "hello world"
    assert len(buf.runs) == 1


def test_back_delete_partial():
    buf = TextBuffer()
    buf.append_text("abcdef")
    assert buf.back_delete_char(2) is True
    assert buf.text == "abcd"


def test_back_delete_more_than_length_clears():
    buf = TextBuffer()
    buf.append_text("abc")
    assert buf.back_delete_char(10) is True
    assert buf.text == ""


def test_back_delete_non_positive():
    buf = TextBuffer()
    buf.append_text("abc")
    assert buf.back_delete_char(0) is False
    assert buf.back_delete_char(-3) is False
    assert buf.text == "abc"


def test_back_delete_across_runs():
    buf = TextBuffer()
    buf.append_text("abc")
    buf.apply_linux_attribute_m(31)
    buf.append_text("de")
    buf.back_delete_char(3)
    assert buf.text == "ab"
    assert buf.runs == [("ab", TextStyle())]


def test_set_text_and_clear():
    buf = TextBuffer()
    buf.set_text("xyz")
    assert buf.text == "xyz"
    buf.clear()
    assert buf.text == ""
    assert len(buf) == 0


def test_foreground_colour():
    buf = TextBuffer()
    assert buf.apply_linux_attributes("\033[31m") is True
    assert buf.style.fg == 31
    assert buf.style.fg_rgb == (255, 0, 0)


def test_multiple_attributes_and_reset():
    buf = TextBuffer()
    buf.apply_linux_attributes("\033[1;32;44m")
    assert buf.style == TextStyle(fg=32, bg=44, bold=True)
    buf.apply_linux_attributes("\033[0m")
    assert buf.style == buf.default_style
    assert buf.style.bold is False


def test_defaults():
    style = TextBuffer().style
    assert style.fg_rgb == (0, 0, 0)
    assert style.bg_rgb == (255, 255, 255)


def test_styled_runs():
    buf = TextBuffer()
    buf.append_text("a")
    buf.apply_linux_attributes("\033[34m")
    buf.append_text("b")
    assert [text for text, _ in buf.runs] == ["a", "b"]
    assert buf.runs[1][1].fg == 34


def test_unknown_attribute_ignored():
    buf = TextBuffer()
    before = buf.style
    assert buf.apply_linux_attribute_m(5) is True
    assert buf.style == before


def test_empty_attributes():
    assert TextBuffer().apply_linux_attributes("") is False


def test_bad_prefix_raises():
    with pytest.raises(ValueError):
        TextBuffer().apply_linux_attributes("[31m")


def test_bad_character_raises():
    with pytest.raises(ValueError):
        TextBuffer().apply_linux_attributes("\033[3x1m")


def test_bad_default_raises():
    with pytest.raises(ValueError):
        TextBuffer(default_fg=50)