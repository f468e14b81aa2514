"""
engine/
-------
History & playback layer.

    from engine import Stepper, History, Recorder
"""

from engine.history  import History
from engine.stepper  import Stepper
from engine.recorder import Recorder, RunMetrics

__all__ = [
    "History",
    "Stepper",
    "Recorder",
    "RunMetrics",
]
