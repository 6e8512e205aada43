"""
Utility functions module.

Timer and time helpers shared across the engine.

Timer Semantics:
- All delayed work (speech-end suppression, restart backoff, help settle)
  goes through a Clock so it can be cancelled explicitly
- Delays are expressed in milliseconds
- Callbacks run on the single event loop that drives the engine
"""
