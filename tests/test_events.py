from nurbs_designer.events import Gesture, gesture_for_button


def test_press_mapping():
    assert gesture_for_button(1, True) is Gesture.PRIMARY_DOWN
    assert gesture_for_button(3, True) is Gesture.SECONDARY_DOWN
    assert gesture_for_button(2, True) is Gesture.TERTIARY_DOWN
    assert gesture_for_button(8, True) is Gesture.NONE


def test_release_mapping():
    assert gesture_for_button(1, False) is Gesture.PRIMARY_UP
    assert gesture_for_button(3, False) is Gesture.NONE
    assert gesture_for_button(2, False) is Gesture.NONE


def test_no_button():
    assert gesture_for_button(None, True) is Gesture.NONE
