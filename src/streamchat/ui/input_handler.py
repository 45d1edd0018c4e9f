"""Key event translation.

Maps one terminal key event to exactly one UI action, independent of the
widget toolkit so it can be exercised without a terminal.

Key names follow Textual's conventions ("enter", "backspace", "pageup", ...);
``character`` is the printable text of the key, if any.
"""

from dataclasses import dataclass
from enum import Enum


class UIAction(str, Enum):
    """What a key press asks the render loop to do."""

    INSERT = "insert"
    DELETE = "delete"
    SUBMIT = "submit"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    QUIT = "quit"


@dataclass(frozen=True)
class KeyAction:
    """A translated key press; ``char`` is only set for INSERT."""

    kind: UIAction
    char: str = ""


KEY_ACTIONS = {
    "enter": UIAction.SUBMIT,
    "backspace": UIAction.DELETE,
    "pageup": UIAction.SCROLL_UP,
    "pagedown": UIAction.SCROLL_DOWN,
    "escape": UIAction.QUIT,
}


def translate_key(key: str, character: str | None = None) -> KeyAction | None:
    """Translate a key event into a UI action.

    Args:
        key: Key name, e.g. "a", "space", "enter", "pageup"
        character: Printable character produced by the key, if any

    Returns:
        The action, or None for keys the chat ignores (arrows, tab, ...)
    """
    kind = KEY_ACTIONS.get(key)
    if kind is not None:
        return KeyAction(kind)
    if character and len(character) == 1 and character.isprintable():
        return KeyAction(UIAction.INSERT, character)
    return None
