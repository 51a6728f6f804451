from tagquiz.keyboards import build_answers_keyboard


def test_answers_keyboard_is_two_by_two():
    markup = build_answers_keyboard(("cat", "dog", "bird", "fish"))
    labels = [[button.text for button in row] for row in markup.keyboard]
    assert labels == [["cat", "dog"], ["bird", "fish"]]
    assert markup.resize_keyboard is True
    assert markup.one_time_keyboard is True
    assert markup.selective is False


def test_answers_keyboard_columns():
    markup = build_answers_keyboard(["a", "b", "c"], columns=1)
    assert [[b.text for b in row] for row in markup.keyboard] == [["a"], ["b"], ["c"]]
