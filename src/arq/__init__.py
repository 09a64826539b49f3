"""
ARQ package - Go-Back-N and Selective-Repeat trace simulation.

Contains implementations for:
- Frame enumeration, sequence numbering and trace events
- Deterministic loss selection
- Go-Back-N simulator with fast retransmit
- Selective-Repeat simulator with NACK recovery
"""

from .frame import FrameEvent, EventType, ReplyType, count_frames, sequence_number
from .loss import LossSelector, select_lost_frames
from .base import ARQSimulator
from .go_back_n import GBNSimulator, GBNState
from .selective_repeat import SRSimulator, SRState

__all__ = [
    'FrameEvent',
    'EventType',
    'ReplyType',
    'count_frames',
    'sequence_number',
    'LossSelector',
    'select_lost_frames',
    'ARQSimulator',
    'GBNSimulator',
    'GBNState',
    'SRSimulator',
    'SRState'
]
