"""Action descriptors.

A descriptor pairs a fixed action name with a backend-provided async handler.
Descriptors do not look inside ``param``; its shape is a convention between
the agent and the backend:

  * Tap / DoubleClick / RightClick / Hover: ``{"x": int, "y": int}``
  * Input: ``{"value": str}``
  * KeyboardPress: ``{"value": str}`` (key identifier, e.g. ``"Enter"``)
  * Scroll: ``{"direction": "up"|"down"|"left"|"right", "distance": int}``
  * DragAndDrop: ``{"from": point, "to": point}``
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict

ActionHandler = Callable[[Any], Awaitable[None]]


class ActionKind(str, Enum):
    TAP = "Tap"
    DOUBLE_CLICK = "DoubleClick"
    RIGHT_CLICK = "RightClick"
    HOVER = "Hover"
    INPUT = "Input"
    KEYBOARD_PRESS = "KeyboardPress"
    SCROLL = "Scroll"
    DRAG_AND_DROP = "DragAndDrop"


_DESCRIPTIONS: Dict[ActionKind, str] = {
    ActionKind.TAP: "Tap the element at a point",
    ActionKind.DOUBLE_CLICK: "Double click the element at a point",
    ActionKind.RIGHT_CLICK: "Right click (secondary activate) the element at a point",
    ActionKind.HOVER: "Move the pointer over a point",
    ActionKind.INPUT: "Type a text value into the focused element",
    ActionKind.KEYBOARD_PRESS: "Press a keyboard key",
    ActionKind.SCROLL: "Scroll in a direction by a distance",
    ActionKind.DRAG_AND_DROP: "Drag from a source point and drop at a destination point",
}


@dataclass(frozen=True)
class DeviceAction:
    kind: ActionKind
    call: ActionHandler = field(compare=False, repr=False)
    description: str = ""

    @property
    def name(self) -> str:
        return self.kind.value

    async def invoke(self, param: Any = None) -> None:
        await self.call(param)


def _define(kind: ActionKind, call: ActionHandler) -> DeviceAction:
    if not callable(call):
        raise TypeError(f"{kind.value} handler must be callable")
    return DeviceAction(kind=kind, call=call, description=_DESCRIPTIONS[kind])


def define_action_tap(call: ActionHandler) -> DeviceAction:
    return _define(ActionKind.TAP, call)


def define_action_double_click(call: ActionHandler) -> DeviceAction:
    return _define(ActionKind.DOUBLE_CLICK, call)


def define_action_right_click(call: ActionHandler) -> DeviceAction:
    return _define(ActionKind.RIGHT_CLICK, call)


def define_action_hover(call: ActionHandler) -> DeviceAction:
    return _define(ActionKind.HOVER, call)


def define_action_input(call: ActionHandler) -> DeviceAction:
    return _define(ActionKind.INPUT, call)


def define_action_keyboard_press(call: ActionHandler) -> DeviceAction:
    return _define(ActionKind.KEYBOARD_PRESS, call)


def define_action_scroll(call: ActionHandler) -> DeviceAction:
    return _define(ActionKind.SCROLL, call)


def define_action_drag_and_drop(call: ActionHandler) -> DeviceAction:
    return _define(ActionKind.DRAG_AND_DROP, call)


# Ordered like ActionKind; backends build their action space from this table.
ACTION_FACTORIES: Dict[ActionKind, Callable[[ActionHandler], DeviceAction]] = {
    ActionKind.TAP: define_action_tap,
    ActionKind.DOUBLE_CLICK: define_action_double_click,
    ActionKind.RIGHT_CLICK: define_action_right_click,
    ActionKind.HOVER: define_action_hover,
    ActionKind.INPUT: define_action_input,
    ActionKind.KEYBOARD_PRESS: define_action_keyboard_press,
    ActionKind.SCROLL: define_action_scroll,
    ActionKind.DRAG_AND_DROP: define_action_drag_and_drop,
}
