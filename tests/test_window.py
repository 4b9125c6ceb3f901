import pytest

from nvgrid.anchors import AnchorInfo, WindowAnchor
from nvgrid.batcher import DrawCommandBatcher
from nvgrid.style import Color, Colors, Style
from nvgrid.window import (
    GridLineCell,
    LineFragment,
    Window,
    WindowDrawCommand,
    WindowType,
)

Kind = WindowDrawCommand.Kind

RED = Style(Colors(foreground=Color(1.0, 0.0, 0.0)))
BLUE = Style(Colors(foreground=Color(0.0, 0.0, 1.0)))
STYLES = {1: RED, 2: BLUE}


def flush(batcher):
    sent = []
    batcher.send_batch(sent.append)
    return sent[0]


def make_window(size=(4, 3)):
    batcher = DrawCommandBatcher()
    window = Window(7, WindowType.editor(), None, (0.0, 0.0), size, batcher)
    flush(batcher)
    return window, batcher


def draw_lines(commands):
    return [c for c in commands if c.kind is Kind.DRAW_LINE]


def row_text(window, row):
    return "".join(window.get_cursor_grid_cell(x, row)[0] for x in range(window.width))


def test_constructor_queues_position():
    batcher = DrawCommandBatcher()
    window = Window(3, WindowType.for_message(True), None, (1.0, 2.0), (5, 2), batcher)
    (command,) = flush(batcher)
    assert command.grid_id == 3
    assert command.kind is Kind.POSITION
    assert command.payload["grid_size"] == (5, 2)
    assert command.payload["grid_position"] == (1.0, 2.0)
    assert command.payload["window_type"] == WindowType(is_message=True, scrolled=True)
    assert (window.width, window.height) == (5, 2)


def test_draw_grid_line_sets_cells_and_redraws_neighbours():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 1, 0, [GridLineCell("ab", 1), GridLineCell("c", 2)], STYLES)
    assert window.get_cursor_grid_cell(0, 1) == ("a", RED, False)
    assert window.get_cursor_grid_cell(2, 1) == ("c", BLUE, False)
    rows = [c.payload["row"] for c in draw_lines(flush(batcher))]
    assert rows == [2, 1, 0]


def test_first_and_last_rows_only_redraw_existing_neighbours():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 0, 0, [GridLineCell("x")], STYLES)
    assert [c.payload["row"] for c in flush(batcher)] == [1, 0]
    window.draw_grid_line(batcher, 2, 0, [GridLineCell("x")], STYLES)
    assert [c.payload["row"] for c in flush(batcher)] == [2, 1]


def test_out_of_bounds_row_is_ignored():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 3, 0, [GridLineCell("zz")], STYLES)
    assert flush(batcher) == []
    assert all(row_text(window, y) == "    " for y in range(3))


def test_repeat_and_style_inheritance():
    window, batcher = make_window()
    window.draw_grid_line(
        batcher, 0, 0, [GridLineCell("a", 1, 2), GridLineCell("b"), GridLineCell("c", 0)], STYLES
    )
    assert row_text(window, 0) == "aabc"
    assert window.get_cursor_grid_cell(2, 0)[1] == RED
    assert window.get_cursor_grid_cell(3, 0)[1] is None


def test_zero_repeat_is_skipped_and_keeps_previous_style():
    window, batcher = make_window()
    window.draw_grid_line(
        batcher, 0, 0, [GridLineCell("a", 1), GridLineCell("z", 2, 0), GridLineCell("b")], STYLES
    )
    assert row_text(window, 0)[:2] == "ab"
    assert window.get_cursor_grid_cell(1, 0)[1] == RED


def test_graphemes_take_one_cell_each():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 0, 0, [GridLineCell("e\u0301x")], STYLES)
    assert window.get_cursor_grid_cell(0, 0)[0] == "e\u0301"
    assert window.get_cursor_grid_cell(1, 0)[0] == "x"


def test_cells_past_the_width_are_dropped():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 0, 2, [GridLineCell("abcdef")], STYLES)
    assert row_text(window, 0) == "  ab"


def test_double_width_cell():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 0, 0, [GridLineCell("W"), GridLineCell(""), GridLineCell("x")], STYLES)
    assert window.get_cursor_grid_cell(0, 0) == ("W", None, True)
    assert window.get_cursor_grid_cell(2, 0) == ("x", None, False)
    line = [c for c in draw_lines(flush(batcher)) if c.payload["row"] == 0][0]
    fragments = line.payload["line_fragments"]
    assert fragments[0] == LineFragment("W", 0, 2, None)
    assert sum(f.width for f in fragments) == window.width


def test_fragments_split_on_style_change():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 0, 0, [GridLineCell("ab", 1), GridLineCell("cd", 2)], STYLES)
    line = [c for c in draw_lines(flush(batcher)) if c.payload["row"] == 0][0]
    assert line.payload["line_fragments"] == [
        LineFragment("ab", 0, 2, RED),
        LineFragment("cd", 2, 2, BLUE),
    ]


def test_box_characters_get_their_own_fragments():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 0, 0, [GridLineCell("a\u2500\u2500\u2502")], STYLES)
    line = [c for c in draw_lines(flush(batcher)) if c.payload["row"] == 0][0]
    texts = [f.text for f in line.payload["line_fragments"]]
    assert texts == ["a", "\u2500\u2500", "\u2502"]


def test_pure_scroll_sends_only_scroll_command():
    window, batcher = make_window()
    for y, text in enumerate(["abcd", "efgh", "ijkl"]):
        window.draw_grid_line(batcher, y, 0, [GridLineCell(text)], STYLES)
    flush(batcher)
    window.scroll_region(batcher, 0, 3, 0, 4, 1, 0)
    (command,) = flush(batcher)
    assert command.kind is Kind.SCROLL
    assert command.payload == dict(top=0, bottom=3, left=0, right=4, rows=1, cols=0)
    assert row_text(window, 0) == "efgh"


def test_partial_scroll_redraws_scrolled_rows():
    window, batcher = make_window()
    for y, text in enumerate(["abcd", "efgh", "ijkl"]):
        window.draw_grid_line(batcher, y, 0, [GridLineCell(text)], STYLES)
    flush(batcher)
    window.scroll_region(batcher, 0, 3, 0, 2, 1, 0)
    commands = flush(batcher)
    assert commands[0].kind is Kind.SCROLL
    assert [c.payload["row"] for c in draw_lines(commands)] == [0, 1]
    assert row_text(window, 0) == "efcd"


def test_clear_and_simple_commands():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 0, 0, [GridLineCell("abcd")], STYLES)
    flush(batcher)
    window.clear(batcher)
    window.hide(batcher)
    window.show(batcher)
    window.close(batcher)
    assert [c.kind for c in flush(batcher)] == [Kind.CLEAR, Kind.HIDE, Kind.SHOW, Kind.CLOSE]
    assert row_text(window, 0) == "    "


def test_redraw_clears_then_draws_bottom_up():
    window, batcher = make_window()
    window.redraw(batcher)
    commands = flush(batcher)
    assert commands[0].kind is Kind.CLEAR
    assert [c.payload["row"] for c in commands[1:]] == list(reversed(range(window.height)))


def test_position_moves_resizes_and_anchors():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 0, 0, [GridLineCell("abcd")], STYLES)
    flush(batcher)
    anchor = AnchorInfo(1, WindowAnchor.NORTH_WEST, 2.0, 3.0)
    window.position(batcher, anchor, (2, 5), (2.0, 3.0))
    (command,) = flush(batcher)
    assert command.payload["anchor_info"] == anchor
    assert command.payload["grid_size"] == (2, 5)
    assert window.grid_position == (2.0, 3.0)
    assert window.anchor_info == anchor
    assert row_text(window, 0) == "ab"


def test_resize_keeps_content():
    window, batcher = make_window()
    window.draw_grid_line(batcher, 1, 0, [GridLineCell("abcd")], STYLES)
    flush(batcher)
    window.resize(batcher, (6, 2))
    (command,) = flush(batcher)
    assert command.kind is Kind.POSITION
    assert row_text(window, 1) == "abcd  "


def test_cursor_cell_outside_grid_is_blank():
    window, _ = make_window()
    assert window.get_cursor_grid_cell(0, 10) == (" ", None, False)
    assert window.get_cursor_grid_cell(10, 0) == (" ", None, False)


def test_scroll_redraw_outside_grid_raises():
    window, batcher = make_window()
    with pytest.raises(IndexError):
        window.scroll_region(batcher, 0, 5, 0, 2, 1, 0)