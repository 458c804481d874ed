import pytest

from commonitor.asctable import (
    COLORS,
    LINES_PER_PAGE,
    TOTAL_ENTRIES,
    AsciiTableView,
    ScrollAction,
    describe_code,
    table_header,
    table_rows,
)


def test_describe_code_fixed_values():
    assert describe_code(0) == "NUL NULL"
    assert describe_code(27) == "ESC Escape"
    assert describe_code(32) == "(Space)"
    assert describe_code(127) == "(DEL)"
    assert describe_code(65) == "A"


@pytest.mark.parametrize("code", [-1, 256])
def test_describe_code_out_of_range(code):
    with pytest.raises(ValueError):
        describe_code(code)


def test_row_columns():
    (row,) = list(table_rows(65, 1))
    dec, octal, rest = row.split(",")
    assert int(dec) == 65
    assert int(octal, 8) == 65
    hexpart, desc = rest.split()
    assert int(hexpart, 16) == 65
    assert desc == "A"


def test_rows_stop_at_end():
    rows = list(table_rows(250, 15))
    assert len(rows) == TOTAL_ENTRIES - 250


def test_header():
    title, sep = table_header()
    assert title.endswith("描述")
    assert set(sep) == {"-"}


def test_initial_view():
    view = AsciiTableView()
    lines = view.visible_lines()
    assert len(lines) == LINES_PER_PAGE
    assert lines[0].endswith("NUL NULL")


def test_line_up_at_top_refused():
    view = AsciiTableView()
    assert view.scroll(ScrollAction.LINE_UP) is False
    assert view.position == 0


def test_bottom_clamps_to_last_page():
    view = AsciiTableView()
    assert view.scroll(ScrollAction.BOTTOM) is True
    assert view.position + LINES_PER_PAGE - 1 == TOTAL_ENTRIES - 1
    assert view.scroll(ScrollAction.LINE_DOWN) is False


def test_page_and_thumb():
    view = AsciiTableView()
    view.scroll(ScrollAction.PAGE_DOWN)
    assert view.position == LINES_PER_PAGE
    view.scroll(ScrollAction.THUMB_TRACK, 100)
    assert view.position == 100
    view.scroll(ScrollAction.TOP)
    assert view.position == 0


def test_wheel():
    view = AsciiTableView()
    assert view.wheel(120) is False
    assert view.wheel(-120) is True
    assert view.position == LINES_PER_PAGE
    assert view.wheel(120) is True
    assert view.position == 0


def test_wheel_at_bottom_refused():
    view = AsciiTableView()
    view.scroll(ScrollAction.BOTTOM)
    assert view.wheel(-120) is False


def test_colour_cycle():
    view = AsciiTableView()
    seen = [view.next_foreground() for _ in COLORS]
    assert seen[-1] == COLORS[0]
    assert set(seen) == set(COLORS)
    assert view.next_background() == COLORS[7]
    assert view.next_background() == COLORS[0]