"""Journey recording."""

from honeycomb.runtime.journey_recorder import JourneyRecorder
from honeycomb.runtime.journey_store import JourneyLogStore

__all__ = ["JourneyRecorder", "JourneyLogStore"]
