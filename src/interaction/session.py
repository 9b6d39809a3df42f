"""
One explorer session: gesture pipeline feeding the interaction HSM.
"""
from dataclasses import dataclass
from typing import Optional

from sensing.config import Config
from sensing.landmarks import HandLandmarks
from sensing.pipeline import GesturePipeline, PipelineResult

from .dispatcher import IntentDispatcher
from .hsm import FrameOutput, InteractionHSM


@dataclass
class SessionFrame:
    hand: PipelineResult
    output: FrameOutput


class ExplorerSession:
    """
    Runs one render tick: process the tracker result, update the HSM,
    dispatch intents, then integrate momentum.

    Everything runs on the caller's thread; nothing is queued between ticks.
    """

    def __init__(self, config: Optional[Config] = None,
                 dispatcher: Optional[IntentDispatcher] = None):
        config = config or Config()
        self.pipeline = GesturePipeline(config)
        self.hsm = InteractionHSM(config.interaction)
        self.dispatcher = dispatcher

    def tick(self, hand: Optional[HandLandmarks], now: float) -> SessionFrame:
        result = self.pipeline.process(hand)
        tip = result.landmarks.index_tip
        output = self.hsm.update(result.gesture, (tip[0], tip[1]), now)
        if self.dispatcher is not None:
            self.dispatcher.dispatch(output.intents)
        self.hsm.apply_momentum()
        return SessionFrame(hand=result, output=output)

    def reset(self) -> None:
        """Clear filter, vote window and HSM state (published NONE, mode WHOLE)."""
        self.pipeline.reset()
        self.hsm.reset()
