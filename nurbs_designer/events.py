from enum import Enum


class Gesture(Enum):
    NONE = "none"
    PRIMARY_DOWN = "primary_down"
    PRIMARY_UP = "primary_up"
    SECONDARY_DOWN = "secondary_down"
    TERTIARY_DOWN = "tertiary_down"


# matplotlib MouseButton values: 1 left, 2 middle, 3 right
_PRESS = {
    1: Gesture.PRIMARY_DOWN,
    3: Gesture.SECONDARY_DOWN,
    2: Gesture.TERTIARY_DOWN,
}


def gesture_for_button(button, pressed):
    if button is None:
        return Gesture.NONE
    button = int(button)
    if pressed:
        return _PRESS.get(button, Gesture.NONE)
    if button == 1:
        return Gesture.PRIMARY_UP
    return Gesture.NONE
