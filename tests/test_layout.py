import pytest

from boxdialog.controls import Button, Field
from boxdialog.errors import DialogConfigError
from boxdialog.layout import compute_layout, dialog_size
from boxdialog.results import DialogResult
from boxdialog.utils import Position, Rect, Size

SCREEN = Size(80, 24)


def contact_controls():
    return [
        Field("First Name", 15, 15, tab_index=0),
        Button("OK", DialogResult.OK, tab_index=1),
        Button("Cancel", DialogResult.CANCEL, tab_index=2),
    ]


def test_single_field_two_buttons_centered():
    controls = contact_controls()
    layout = compute_layout(controls, Position(4, 1), SCREEN)

    # label 10 + display 15 + 4 + 2*4
    assert layout.size == Size(37, 8)
    assert layout.origin == Position(22, 8)
    assert layout.rect == Rect(22, 8, 37, 8)

    field_pos, ok_pos, cancel_pos = layout.positions
    assert field_pos == Position(27, 10)
    assert ok_pos == Position(28, 14)
    assert cancel_pos == Position(22 + 37 - 4 - 2 - 6, 14)
    assert layout.separator_row == 13
    assert layout.button_row == 14


def test_apply_positions_controls_and_editor():
    controls = contact_controls()
    compute_layout(controls, Position(4, 1), SCREEN).apply(controls)

    field = controls[0]
    assert field.position == Position(27, 10)
    assert field.input.position == Position(22 + 1 + 4 + 10 + 2, 10)


def test_labels_right_aligned_to_longest():
    controls = [Field("Name", 10, 20, 0), Field("Email", 20, 40, 1)]
    layout = compute_layout(controls, Position(2, 1), SCREEN)
    layout.apply(controls)

    # both fields scroll, so the widest input carries its two markers
    assert layout.size == Size(5 + 22 + 4 + 4, 4 + 4 + 2)
    assert layout.origin == Position(23, 7)
    assert controls[0].position == Position(27, 9)
    assert controls[1].position == Position(26, 11)
    assert controls[0].input.position.x == controls[1].input.position.x == 33


def test_one_button_is_centered():
    controls = [Button("OK")]
    layout = compute_layout(controls, Position(2, 1), SCREEN)
    assert layout.size == Size(12, 6)
    assert layout.origin == Position(34, 9)
    assert layout.positions == [Position(39, 13)]


def test_three_buttons_outer_aligned_middle_centered():
    controls = [Button("Yes"), Button("No"), Button("Cancel")]
    layout = compute_layout(controls, Position(2, 1), SCREEN)
    assert layout.size.width == 9 + 8 + 12 + 4
    assert [p.x for p in layout.positions] == [28, 39, 47]


def test_button_row_can_set_the_width():
    controls = [Field("A", 2, 2, 0), Button("Abort"), Button("Retry"), Button("Ignore")]
    assert dialog_size(controls, Position(1, 1)).width == (11 + 11 + 12) + 2


def test_four_buttons_rejected():
    controls = [Button("A"), Button("B"), Button("C"), Button("D")]
    with pytest.raises(DialogConfigError):
        compute_layout(controls, Position(2, 1), SCREEN)


def test_no_controls_gives_minimum_box():
    layout = compute_layout([], Position(2, 1), SCREEN)
    assert layout.size == Size(6, 6)
    assert layout.origin == Position(37, 9)
    assert layout.positions == []


def test_origin_clamped_on_tiny_screen():
    layout = compute_layout(contact_controls(), Position(4, 1), Size(10, 4))
    assert layout.origin == Position(0, 0)


def test_negative_margin_rejected():
    with pytest.raises(DialogConfigError):
        compute_layout(contact_controls(), Position(-1, 0), SCREEN)


def test_scrolling_field_reserves_marker_columns():
    assert dialog_size([Field("A", 5, 5, 0)], Position(0, 1)).width == 1 + 5 + 4
    assert dialog_size([Field("A", 5, 20, 0)], Position(0, 1)).width == 1 + 7 + 4
    assert dialog_size([Field("A", 5, 20, 0)], Position(1, 1)).width == 1 + 7 + 4 + 2


def test_fields_stack_in_list_order():
    first, second = Field("B", 3, 3, 1), Field("A", 3, 3, 0)
    layout = compute_layout([first, second], Position(2, 1), SCREEN)
    assert layout.positions[0].y + 2 == layout.positions[1].y
