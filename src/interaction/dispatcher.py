"""
Routes HSM intents to renderer callbacks.

Keeps the state machine free of any animation or picking code: the renderer
registers whichever hooks it implements and drains each frame's intents
through ``dispatch``.
"""
from typing import Callable, Iterable, Optional

from .intents import Explode, Focus, Implode, Intent, RaycastAt, ResetFocus


class IntentDispatcher:
    def __init__(
        self,
        on_explode: Optional[Callable[[], None]] = None,
        on_implode: Optional[Callable[[], None]] = None,
        on_raycast: Optional[Callable[[float, float], None]] = None,
        on_reset_focus: Optional[Callable[[], None]] = None,
        on_focus: Optional[Callable[[str], None]] = None,
    ):
        """
        Args:
            on_explode: Spread the model apart
            on_implode: Recombine the model
            on_raycast: Pick at (ndc_x, ndc_y)
            on_reset_focus: Return from the close-up view
            on_focus: Zoom onto a part id
        """
        self.on_explode = on_explode
        self.on_implode = on_implode
        self.on_raycast = on_raycast
        self.on_reset_focus = on_reset_focus
        self.on_focus = on_focus

    def dispatch(self, intents: Iterable[Intent]) -> int:
        """
        Execute intents in order. Missing hooks are skipped.

        Returns:
            Number of callbacks actually invoked.
        """
        called = 0
        for intent in intents:
            if isinstance(intent, Explode) and self.on_explode:
                self.on_explode()
            elif isinstance(intent, Implode) and self.on_implode:
                self.on_implode()
            elif isinstance(intent, RaycastAt) and self.on_raycast:
                self.on_raycast(intent.ndc_x, intent.ndc_y)
            elif isinstance(intent, ResetFocus) and self.on_reset_focus:
                self.on_reset_focus()
            elif isinstance(intent, Focus) and self.on_focus:
                self.on_focus(intent.part_id)
            else:
                continue
            called += 1
        return called
